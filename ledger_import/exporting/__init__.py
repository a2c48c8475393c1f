from .ofx import OFXWriter
from .tabular import frame_to_csv, parse_result_to_frame, transactions_to_frame

__all__ = ['OFXWriter', 'frame_to_csv', 'parse_result_to_frame', 'transactions_to_frame']
