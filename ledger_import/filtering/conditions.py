"""
Transaction condition engine.

A condition is a dict. Every key present must pass for the transaction to
match (implicit AND). Keys are either one of the named filters below, a
combinator (``and`` / ``or`` with a list of nested conditions), or the name
of a Transaction field compared with ``check_value``.

    {
        'search': 'coffee',
        'types': ['outcome'],
        'date_from': '2024-03-01',
        'or': [{'account': 'acc-1'}, {'account': 'acc-2'}],
    }

Deleted transactions are excluded unless ``show_deleted`` or
``only_deleted`` is set, at every nesting level.
"""
from typing import Any, Callable, Collection, Dict, Iterable, List, Optional

from ledger_import.common.models import Transaction
from .basic import check_value
from .helpers import TrType, get_type, is_deleted, is_viewed

Condition = Dict[str, Any]


class UnknownFilterFieldError(KeyError):
    """A condition names neither a known filter nor a transaction field."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Unknown filtering field: {field}")

    def __str__(self):
        return self.args[0]


# Named filters

def check_search(tr: Transaction, condition: Optional[str], ctx) -> bool:
    if not condition:
        return True
    needle = condition.upper()
    return bool(
        (tr.comment and needle in tr.comment.upper())
        or (tr.payee and needle in tr.payee.upper())
    )


def check_type(tr, condition, ctx) -> bool:
    return check_value(get_type(tr, ctx), condition)


def check_types(tr, condition, ctx) -> bool:
    if not condition:
        return True
    return get_type(tr, ctx) in condition


def check_deleted(tr: Transaction, show_deleted: Optional[bool], only_deleted: Optional[bool]) -> bool:
    deleted = is_deleted(tr)
    if only_deleted:
        return deleted
    if deleted:
        return bool(show_deleted)
    return True


def check_is_viewed(tr, condition, ctx) -> bool:
    return is_viewed(tr) == condition


def check_tags(tr: Transaction, condition, ctx) -> bool:
    """
    Only income and outcome transactions can match a tag filter.
    The tag id 'null' stands for "no tags".
    """
    if not condition:
        return True
    if get_type(tr, ctx) not in (TrType.INCOME, TrType.OUTCOME):
        return False

    tags = tr.tag or []
    for tag_id in condition:
        if tag_id == 'null':
            if not tags:
                return True
        elif tag_id in tags:
            return True
    return False


def check_main_tag(tr, condition, ctx) -> bool:
    main_tag = tr.tag[0] if tr.tag else None
    return check_value(main_tag, condition)


def check_month(tr, condition, ctx) -> bool:
    return check_value(tr.date[:7], condition)


def check_account(tr, condition, ctx) -> bool:
    return check_value(tr.income_account, condition) or check_value(tr.outcome_account, condition)


def check_accounts(tr, condition, ctx) -> bool:
    if not condition:
        return True
    return tr.income_account in condition or tr.outcome_account in condition


def check_currencies(tr, condition, ctx) -> bool:
    if not condition:
        return True
    return tr.income_instrument in condition or tr.outcome_instrument in condition


def check_amount(tr, condition, ctx) -> bool:
    tr_type = get_type(tr, ctx)
    if tr_type == TrType.INCOME:
        return check_value(tr.income, condition)
    if tr_type == TrType.OUTCOME:
        return check_value(tr.outcome, condition)
    return check_value(tr.income, condition) or check_value(tr.outcome, condition)


def check_date_from(tr, condition, ctx) -> bool:
    if not condition:
        return True
    return tr.date >= condition


def check_date_to(tr, condition, ctx) -> bool:
    if not condition:
        return True
    return tr.date <= condition


NAMED_FILTERS: Dict[str, Callable[[Transaction, Any, Collection[str]], bool]] = {
    'search': check_search,
    'type': check_type,
    'types': check_types,
    'is_viewed': check_is_viewed,
    'tags': check_tags,
    'main_tag': check_main_tag,
    'month': check_month,
    'account': check_account,
    'accounts': check_accounts,
    'currencies': check_currencies,
    'amount': check_amount,
    'date_from': check_date_from,
    'date_to': check_date_to,
}

TRANSACTION_FIELDS = Transaction.field_names()
DELETION_KEYS = ('show_deleted', 'only_deleted')
KNOWN_KEYS = frozenset(NAMED_FILTERS) | TRANSACTION_FIELDS | frozenset(DELETION_KEYS) | {'and', 'or'}


def check_key(key: str, tr: Transaction, conditions: Condition, debt_account_ids: Collection[str] = ()) -> bool:
    """
    Checks a single key of a condition against a transaction. A None value
    is a real condition (``{'payee': None}`` matches transactions without a
    payee) except for filters that treat an empty condition as "any".
    """
    if key not in KNOWN_KEYS:
        raise UnknownFilterFieldError(key)
    value = conditions.get(key)

    if key in DELETION_KEYS:
        return check_deleted(tr, conditions.get('show_deleted'), conditions.get('only_deleted'))
    if key == 'or':
        return not value or any(check_conditions(tr, c, debt_account_ids) for c in value)
    if key == 'and':
        return all(check_conditions(tr, c, debt_account_ids) for c in value or ())

    handler = NAMED_FILTERS.get(key)
    if handler is not None:
        return handler(tr, value, debt_account_ids)
    return check_value(getattr(tr, key), value)


def check_conditions(
    tr: Transaction,
    conditions: Optional[Condition] = None,
    debt_account_ids: Collection[str] = (),
) -> bool:
    """True if the transaction matches every key of ``conditions``."""
    conditions = conditions or {}
    if not check_deleted(tr, conditions.get('show_deleted'), conditions.get('only_deleted')):
        return False
    return all(check_key(key, tr, conditions, debt_account_ids) for key in conditions)


def check_raw(conditions: Optional[Condition] = None, debt_account_ids: Collection[str] = ()) -> Callable[[Transaction], bool]:
    """Predicate form of ``check_conditions``."""
    def predicate(tr: Transaction) -> bool:
        return check_conditions(tr, conditions, debt_account_ids)
    return predicate


def filter_transactions(
    transactions: Iterable[Transaction],
    conditions: Optional[Condition] = None,
    debt_account_ids: Collection[str] = (),
) -> List[Transaction]:
    return [tr for tr in transactions if check_conditions(tr, conditions, debt_account_ids)]
