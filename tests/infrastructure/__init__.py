"""
Shared test infrastructure for cvgen.

Modules:
- file_utils: creating files and directories
- project_builders: apis/<group>/<version> trees for generator tests
- fakes: in-memory renderer and writer collaborators
- cli_utils: running the CLI in a subprocess
"""

from .file_utils import write
from .project_builders import ApisTree, make_apis_tree, write_boilerplate
from .fakes import FailingRenderer, FailingWriter, FakeRenderer, FakeWriter
from .cli_utils import run_cli, jload

__all__ = [
    "write",
    "ApisTree",
    "make_apis_tree",
    "write_boilerplate",
    "FailingRenderer",
    "FailingWriter",
    "FakeRenderer",
    "FakeWriter",
    "run_cli",
    "jload",
]
