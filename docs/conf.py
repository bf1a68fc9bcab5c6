# Configuration file for the Sphinx documentation builder.
#
# For the full list of options, see:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys

# -- Path setup --------------------------------------------------------------

# Project root must be importable for autodoc
sys.path.insert(0, os.path.abspath(".."))

# Django must be configured before autodoc imports models
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tennis_camp.settings")

import django
django.setup()

# -- Project information -----------------------------------------------------

project = "Tennis Camp"
author = "Tennis Camp Team"
release = "0.1"
version = "0.1.0"

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.viewcode",
    "sphinx.ext.napoleon",     # NumPy-style docstrings
]

templates_path = ["_templates"]
exclude_patterns = ["_build"]

language = "en"

# -- Options for HTML output -------------------------------------------------

html_theme = "sphinx_rtd_theme"

# -- Autodoc settings --------------------------------------------------------

autodoc_member_order = "bysource"
autodoc_typehints = "description"
