# -*- coding: utf-8; -*-

version = '0.3.0'
