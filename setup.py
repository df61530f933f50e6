#!/usr/bin/env python

from setuptools import setup

setup(
    name="xcwidget",
    version="0.1.0",
    packages=[
        "xcwidget",
        "xcwidget.details",
        "xcwidget.xcode",
    ],
    python_requires=">=3.9",
    extras_require={"test": ["pytest"]},
)
