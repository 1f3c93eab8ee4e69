# -*- coding: utf-8; -*-

"""Grammars of the supported header values, one module per RFC."""
