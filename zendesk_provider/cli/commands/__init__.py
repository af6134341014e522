from .main import cli_start
from .plan import plan
from .apply import apply, destroy
from .import_resource import import_resource
from .show import show
from .schema import schema
from .version import version

__all__ = [
    "cli_start",
    "plan",
    "apply",
    "destroy",
    "import_resource",
    "show",
    "schema",
    "version",
]
