from pathlib import Path
from setuptools import setup, find_packages


NAME = "grouper"
DESCRIPTION = "Grouper splits a homogeneous sequence of records (named tuples, dataclasses, NumPy structured arrays) into named groups and reduces each group with your own function."

LICENSE = "MIT"
PYTHON = ">=3.8"

REQUIREMENTS = ["rich", "tqdm", "numpy"]
EXTRA_REQ = ["tox", "pytest", "twine", "build"]

with open("README.md", encoding="utf-8") as f:
    LONG_DESCRIPTION = f.read()

with Path("src", NAME, "__version__.py").open(encoding="utf-8") as f:
    about = {}
    exec(f.read(), about)
    VERSION = about["__version__"]

setup(
    name=NAME,
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    license=LICENSE,
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=PYTHON,
    install_requires=REQUIREMENTS,
    extras_require={"dev": EXTRA_REQ},
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    keywords=[
        "group by",
        "reduce",
        "split apply combine",
        "records",
        "dataclass",
        "namedtuple",
        "structured array",
    ],
)
