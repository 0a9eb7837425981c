# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Brazilian taxpayer documents (CPF / CNPJ).

- CPF: 11 digits, individuals.
- CNPJ: 14 digits, companies.

Both carry two check digits computed with a weighted modulo-11 sum. Any
number made of a single repeated digit (e.g. "111.111.111-11") passes the
arithmetic but is not a valid document and is always rejected.
"""

import re

_NON_DIGITS = re.compile(r"\D")

_CNPJ_WEIGHTS_1 = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
_CNPJ_WEIGHTS_2 = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)


def clean_document(text: str) -> str:
    """Strip everything but digits."""
    return _NON_DIGITS.sub("", text or "")


def _cpf_digit(digits: str, first_weight: int) -> int:
    total = sum(int(d) * w for d, w in zip(digits, range(first_weight, 1, -1)))
    remainder = (total * 10) % 11
    return 0 if remainder == 10 else remainder


def _cnpj_digit(digits: str, weights: tuple[int, ...]) -> int:
    total = sum(int(d) * w for d, w in zip(digits, weights))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(text: str) -> bool:
    digits = clean_document(text)
    if len(digits) != 11 or len(set(digits)) == 1:
        return False
    if _cpf_digit(digits[:9], 10) != int(digits[9]):
        return False
    return _cpf_digit(digits[:10], 11) == int(digits[10])


def is_valid_cnpj(text: str) -> bool:
    digits = clean_document(text)
    if len(digits) != 14 or len(set(digits)) == 1:
        return False
    if _cnpj_digit(digits[:12], _CNPJ_WEIGHTS_1) != int(digits[12]):
        return False
    return _cnpj_digit(digits[:13], _CNPJ_WEIGHTS_2) == int(digits[13])


def is_valid_document(text: str) -> bool:
    """Validate a CPF (11 digits) or CNPJ (14 digits), punctuation ignored."""
    digits = clean_document(text)
    if len(digits) == 11:
        return is_valid_cpf(digits)
    if len(digits) == 14:
        return is_valid_cnpj(digits)
    return False


def format_document(text: str) -> str:
    """
    Format a document as 000.000.000-00 (CPF) or 00.000.000/0000-00 (CNPJ).

    Values with another number of digits are returned as digits only.
    """
    d = clean_document(text)
    if len(d) == 11:
        return f"{d[:3]}.{d[3:6]}.{d[6:9]}-{d[9:]}"
    if len(d) == 14:
        return f"{d[:2]}.{d[2:5]}.{d[5:8]}/{d[8:12]}-{d[12:]}"
    return d
