"""
context-grep: print lines matching a pattern together with merged windows of
surrounding context.
"""

__version__ = "0.1.0"
