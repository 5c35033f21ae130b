# payroll_api/models/__init__.py
import importlib
import pkgutil
import pathlib

_EXCLUDE_PREFIXES = (
    "payroll_api.models.__pycache__",
    "payroll_api.models.tests",
)


def load_all():
    """Import every .py in this package (and subpackages) so all models register."""
    pkg = __name__
    pkg_path = pathlib.Path(__file__).parent

    def _walk_and_import(pkg_name: str, path: pathlib.Path):
        for mod in pkgutil.iter_modules([str(path)]):
            full = f"{pkg_name}.{mod.name}"
            if full.startswith(_EXCLUDE_PREFIXES):
                continue
            importlib.import_module(full)
            subpath = path / mod.name
            if subpath.is_dir() and (subpath / "__init__.py").exists():
                _walk_and_import(full, subpath)

    _walk_and_import(pkg, pkg_path)
