from config import PENSION_ACCESS_AGE


def pension_accessible(age: int) -> bool:
    return age >= PENSION_ACCESS_AGE


def tap_pension(liquid: float, pension: float, age: int) -> tuple[float, float]:
    """
    Cover a liquid shortfall from the pension pot once it can be accessed.
    Returns (liquid, pension). Before the access age a negative liquid balance
    is left as is, with no pension backstop.
    """
    if liquid >= 0 or not pension_accessible(age):
        return liquid, pension
    needed = -liquid
    if pension >= needed:
        return 0.0, pension - needed
    return liquid + pension, 0.0
