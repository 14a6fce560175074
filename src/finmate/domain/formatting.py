def format_amount(amount: float) -> str:
    return f"${amount:.2f}"


def join_names(names: list[str]) -> str:
    return ", ".join(names)
