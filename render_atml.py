#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render an ATML label template to PDF.
"""

# local repo modules
import atml_renderer.cli


if __name__ == "__main__":
	atml_renderer.cli.main()
