# setup.py
from setuptools import setup, find_packages

setup(
    name="lispy",
    version="0.9.0",
    description="A small Lisp with S-expressions, Q-expressions and closures",
    python_requires=">=3.10",
    packages=find_packages(include=["lispy", "lispy.*", "lispy_lsp", "lispy_lsp.*"]),
    # Bundled prelude, loaded by Interpreter(prelude='auto')
    package_data={"lispy": ["prelude/std/*.lspy"]},
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "lispy=lispy.__main__:main",
            "lispy-ls=lispy_lsp.server:main",
        ],
    },
    zip_safe=False,
)
