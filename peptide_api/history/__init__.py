# -*- coding: utf-8 -*-
"""Per-user suggestion history."""
