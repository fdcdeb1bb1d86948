"""
Compare key constants between backend and frontend.
Exit 1 if any drift is detected.

Constant groups verified:
  - Model catalog:     AVAILABLE_MODELS  ↔  AVAILABLE_MODELS
  - Settings defaults: DEFAULT_*         ↔  DEFAULT_*
  - Input bounds:      TEMPERATURE_* / MAX_TOKENS_* / ROTATION_INTERVAL_MIN
"""

import ast
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent
BACKEND_CONSTANTS = ROOT / "backend" / "domain" / "constants.py"
FRONTEND_CONSTANTS = ROOT / "frontend" / "config.py"

SHARED_SCALARS = [
    "DEFAULT_SETTINGS_ID",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_ROTATION_INTERVAL",
    "DEFAULT_MODEL_NAME",
    "TEMPERATURE_MIN",
    "TEMPERATURE_MAX",
    "MAX_TOKENS_MIN",
    "MAX_TOKENS_MAX",
    "ROTATION_INTERVAL_MIN",
]


# ---------------------------------------------------------------------------
# Extraction helpers
# ---------------------------------------------------------------------------


def _get_node_name(node: ast.AST) -> str | None:
    """Return the variable name from an Assign or AnnAssign node."""
    if isinstance(node, ast.Assign):
        if len(node.targets) == 1 and isinstance(node.targets[0], ast.Name):
            return node.targets[0].id
    elif isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
        return node.target.id
    return None


def _get_node_value(node: ast.AST) -> ast.expr | None:
    """Return the value expression from an Assign or AnnAssign node."""
    if isinstance(node, (ast.Assign, ast.AnnAssign)):
        return node.value
    return None


def extract_python_dict(filepath: Path, var_name: str) -> dict[str, str]:
    """Extract a top-level dict[str, str] constant from a Python file using AST."""
    tree = ast.parse(filepath.read_text())
    for node in tree.body:
        value = _get_node_value(node)
        if _get_node_name(node) == var_name and isinstance(value, ast.Dict):
            return {
                k.value: v.value
                for k, v in zip(value.keys, value.values)
                if isinstance(k, ast.Constant) and isinstance(v, ast.Constant)
            }
    raise ValueError(f"{var_name} not found as a dict in {filepath}")


def extract_python_scalar(filepath: Path, var_name: str) -> object:
    """Extract a top-level literal constant (str / int / float)."""
    tree = ast.parse(filepath.read_text())
    for node in tree.body:
        value = _get_node_value(node)
        if _get_node_name(node) == var_name and isinstance(value, ast.Constant):
            return value.value
    raise ValueError(f"{var_name} not found as a literal in {filepath}")


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def check_models(backend: Path = BACKEND_CONSTANTS, frontend: Path = FRONTEND_CONSTANTS) -> list[str]:
    """Verify both model catalogs list the same ids, names and order."""
    backend_models = extract_python_dict(backend, "AVAILABLE_MODELS")
    frontend_models = extract_python_dict(frontend, "AVAILABLE_MODELS")
    if list(backend_models.items()) != list(frontend_models.items()):
        return [
            f"AVAILABLE_MODELS mismatch:\n"
            f"  backend:  {backend_models}\n"
            f"  frontend: {frontend_models}"
        ]
    return []


def check_scalars(backend: Path = BACKEND_CONSTANTS, frontend: Path = FRONTEND_CONSTANTS) -> list[str]:
    """Verify defaults and bounds agree."""
    errors = []
    for name in SHARED_SCALARS:
        b = extract_python_scalar(backend, name)
        f = extract_python_scalar(frontend, name)
        if b != f:
            errors.append(f"{name} mismatch: backend={b!r} frontend={f!r}")
    return errors


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main() -> None:
    errors: list[str] = []
    errors.extend(check_models())
    errors.extend(check_scalars())

    if errors:
        print("Constant sync errors:")
        for e in errors:
            print(f"  - {e}")
        sys.exit(1)
    else:
        print("Constants in sync.")


if __name__ == "__main__":
    main()
