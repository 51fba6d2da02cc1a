from __future__ import annotations

import importlib


def test_package_imports_with_docstring():
    package = importlib.import_module("src.staffdesk.staffdesk")

    assert package.__doc__.startswith("StaffDesk package.")
    assert "thin Flask controller" in package.__doc__
