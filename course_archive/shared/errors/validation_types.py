# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import StrEnum


class ValidationErrorType(StrEnum):
    MISSING = "missing"
    BLANK = "blank"
    PASSWORD_TOO_SHORT = "password_too_short"
    DATE_RANGE = "date_range"
    GRADUATES_EXCEED_BENEFICIARIES = "graduates_exceed_beneficiaries"
    YEAR_OUT_OF_RANGE = "year_out_of_range"


__all__ = ["ValidationErrorType"]
