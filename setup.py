# setup.py
from setuptools import setup, find_packages

setup(
    name="attolisp",
    version="0.2.0",
    description="AttoLisp: a small Lisp with an integer/decimal numeric tower",
    python_requires=">=3.10",
    packages=find_packages(include=["attolisp", "attolisp.*", "attolisp_lsp", "attolisp_lsp.*"]),
    package_data={"attolisp": ["prelude/*.al"]},
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "attolisp=attolisp.cli:main",
            "attolisp-ls=attolisp_lsp.server:main",
        ],
    },
    zip_safe=False,
)
