def format_number(value: float, decimals: int = 2) -> str:
    """
    Formatta un numero senza zeri finali: 25.0 -> '25', 66.67 -> '66.67'.
    """
    text = f"{float(value):.{decimals}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text == '-0':
        text = '0'
    return text
