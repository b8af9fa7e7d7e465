# -*- coding: utf-8 -*-
"""User profile validation (report) and sanitization (repair)."""

from .models import ValidationOptions, ValidationResult
from .validator import UserProfileValidator

__all__ = [
    'UserProfileValidator',
    'ValidationOptions',
    'ValidationResult',
]
