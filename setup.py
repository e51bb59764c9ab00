# setup.py
from setuptools import setup, find_packages

setup(
    name="leek",
    version="0.1.0",
    description="Editable buffers, a span-tagged parser and AST queries for the Leek scripting language",
    packages=find_packages(include=["leek", "leek.*", "leek_lsp", "leek_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=2.0",
        "lsprotocol>=2025.0.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "leek-ls=leek_lsp.server:main",
        ],
    },
    zip_safe=False,
)
