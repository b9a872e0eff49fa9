from setuptools import setup

setup(
    name="mdtty",
    version="0.1.0",
    description="Render markdown events to a terminal, with styles, hyperlinks and code highlighting.",
    license="MIT",
    packages=["mdtty"],
    python_requires=">=3.10",
    install_requires=[
        "typing_extensions>=4.4",
    ],
    extras_require={
        "test": [
            "pytest",
            "sybil>=6",
        ],
    },
)
