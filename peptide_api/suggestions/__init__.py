# -*- coding: utf-8 -*-
"""Peptide suggestions by health goal and age."""
