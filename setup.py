import io
import os

from setuptools import setup, find_packages


version = "0.1.0"

install_requires = [
    "pycryptodome",
    "ecdsa",
    "mnemonic",
]

dev_extras = [
    "nose",
    "pytest",
    "pep8",
]


CWD = os.path.dirname(os.path.realpath(__file__))

long_description = "Amethyst hardware wallet emulator"
if os.path.exists(os.path.join(CWD, "README.md")):
    with io.open(os.path.join(CWD, "README.md"), encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="amethyst_glue",
    version=version,
    description="Amethyst hardware wallet emulator",
    long_description=long_description,
    license="MIT",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Security",
    ],
    packages=find_packages(),
    include_package_data=True,
    python_requires=">=3.5",
    install_requires=install_requires,
    extras_require={
        "dev": dev_extras,
    },
)
