import math


def group_indian(number: int) -> str:
    # 12345678 -> 1,23,45,678
    digits = str(abs(number))
    if len(digits) <= 3:
        grouped = digits
    else:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        grouped = ",".join(pairs + [tail])
    return f"-{grouped}" if number < 0 else grouped


def format_inr(value) -> str:
    if value is None or not math.isfinite(value):
        return "-"
    return f"₹{group_indian(int(round(value)))}"


def format_percent(fraction) -> str:
    if fraction is None or not math.isfinite(fraction):
        return "-"
    return f"{fraction * 100:.0f}%"
