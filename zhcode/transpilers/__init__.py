"""
ZhCode Transpilers - Convert ZhCode AST to target languages
"""

from .javascript import JavaScriptTranspiler, transpile

__all__ = [
    'JavaScriptTranspiler',
    'transpile',
]
