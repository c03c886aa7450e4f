"""Sex / residency classification from the first CNP digit."""

from cnp_util.models.cnp import Sex

FOREIGN_CITIZEN_DIGIT = 9


def classify_sex(sex_digit: int) -> Sex:
    """Classify the first CNP digit.

    9 denotes a foreign citizen; otherwise odd digits are male and even
    digits female.
    """
    if sex_digit == FOREIGN_CITIZEN_DIGIT:
        return Sex.FOREIGN
    if sex_digit % 2 == 0:
        return Sex.FEMALE
    return Sex.MALE
