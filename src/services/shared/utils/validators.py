from decimal import Decimal, InvalidOperation


def to_decimal(v: object) -> Decimal | None:
    """任意の値を Decimal に変換する

    Pydantic の field_validator (mode="before") から呼び出すことを想定。
    None（省略された任意項目）はそのまま返す。
    """
    if v is None or isinstance(v, Decimal):
        return v
    try:
        return Decimal(str(v))
    except InvalidOperation as e:
        raise ValueError(f"Invalid decimal value: {v}") from e


def blank_to_none(v: object) -> object:
    """空文字・空白のみの文字列を None に寄せる（フォーム由来の入力向け）"""
    if isinstance(v, str) and not v.strip():
        return None
    return v
