from lispy.reader.node import AstNode
from lispy.reader.parser import lex, parse, parse_expressions, TokenStream
from lispy.reader.reader import read

__all__ = ["AstNode", "lex", "parse", "parse_expressions", "TokenStream", "read"]
