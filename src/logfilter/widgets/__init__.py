"""Textual widgets for logfilter."""
