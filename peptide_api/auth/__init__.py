# -*- coding: utf-8 -*-
"""User accounts: registration, login, profile."""
