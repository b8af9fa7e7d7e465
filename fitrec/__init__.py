# -*- coding: utf-8 -*-
"""fitrec — fitness/nutrition recommendation model and user-profile validation."""

__version__ = "0.1.0"
