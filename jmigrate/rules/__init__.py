# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Built-in recipes. Importing this package registers them."""

from . import jackson  # noqa: F401
