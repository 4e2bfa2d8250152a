"""
GGUF model launcher front-end

Resolves which model artifact and prompt template to hand to a local
inference backend:
- Discovers cached .gguf models in a working directory
- Downloads a model from a URL when nothing suitable is cached
- Picks the prompt template interactively or from the command line
"""

__version__ = "0.1.0"
