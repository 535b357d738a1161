"""Sphinx documentation configuration file."""

# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------
project = "growthsim"
author = "growthsim developers"

# -- General configuration ---------------------------------------------------
extensions = [
    "sphinx.ext.apidoc",
    "sphinx.ext.autodoc",
    "sphinx.ext.mathjax",
    "sphinx.ext.napoleon",
]
exclude_patterns = ["_build"]

# -- Options for apidoc ------------------------------------------------------
apidoc_modules = [
    {
        "path": "../src/growthsim",
        "destination": "api",
        "separate_modules": True,
        "module_first": True,
    },
]

# -- Options for HTML output -------------------------------------------------
html_theme = "pydata_sphinx_theme"
html_sidebars: dict[str, list[str]] = {
    "api/*": [],
}

# -- Options for autodoc -----------------------------------------------------
autoclass_content = "both"
autodoc_member_order = "bysource"
autodoc_typehints = "description"
