#! /usr/bin/python
# -*- coding: utf-8 -*-

from setuptools import find_namespace_packages, setup


setup(
    name="rook-deploy-tests",
    version="1.0",
    packages=find_namespace_packages(include=["rook_harness"]),
    install_requires=[
        "colorlog",
        "kubernetes",
        "openshift",
        "openshift-python-wrapper",
        "pytest",
        "pytest-testconfig",
        "timeout-sampler",
    ],
    python_requires=">=3.8",
)
