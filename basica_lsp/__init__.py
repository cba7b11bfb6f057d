"""
BASICA Language Server
Editor intelligence for line-numbered BASIC: diagnostics, navigation,
rename, completion, outline, folding, semantic highlighting
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
