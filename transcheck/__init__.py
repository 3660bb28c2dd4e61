"""transcheck - cross-references i18n annotations in markup against translation files."""

__version__ = "0.1.0"
