"""phpconcepts: catalog named PHP declarations from tree-sitter syntax trees."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("php-concepts")
except PackageNotFoundError:
    __version__ = "dev"
