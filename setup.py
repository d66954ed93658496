"""Packaging entry point; metadata and dependencies live in `setup.cfg`."""

import pathlib

import setuptools

here = pathlib.Path(__file__).parent.resolve()

readme = (here / "README.md").read_text(encoding="utf-8")

setuptools.setup(
    long_description=readme,
    long_description_content_type="text/markdown",
)
