"""Order-file front end: lexer, backtracking parser and tree walker."""

__version__ = "0.1.0"
