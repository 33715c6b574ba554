import os, re
from setuptools import setup, find_packages

PACKAGE = "mutator"

# Read the README file
with open("README.md", encoding="utf-8") as f:
    mutator_readme = f.read()

def read_file(filepath: str) -> str:
    """Read and return the content of a file."""
    with open(filepath, "r", encoding="utf-8") as f:
        return f.read().strip()

def get_dependencies() -> list:
    """Retrieve dependencies from the requirements file."""
    depfile = "requirements.txt"
    if os.path.exists(depfile):
        return [
            line.strip() for line in read_file(depfile).splitlines()
            if line.strip() and not line.startswith("#")
        ]
    return []

def get_version() -> str:
    """Retrieve the package version from the version file."""
    versionfile = os.path.join(PACKAGE, "_version.py")

    if os.path.exists(versionfile):
        verstrline = read_file(versionfile)
        parts = {
            name: re.search(rf"^{name} = (\d+)", verstrline, re.M)
            for name in ("VERSION_MAJOR", "VERSION_MINOR", "VERSION_PATCH")
        }
        if all(parts.values()):
            return ".".join(match.group(1) for match in parts.values())
        raise RuntimeError("Unable to find version components in '_version.py'.")

    raise FileNotFoundError("Version file '_version.py' not found.")

# Define optional dependencies
extras_require = {
    # Testing dependencies
    "test": [
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "pytest-mock>=3.11.0",
        "hypothesis>=6.88.0",
    ],

    # Development dependencies
    "dev": [
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "pytest-mock>=3.11.0",
        "hypothesis>=6.88.0",
        "black>=23.0.0",
        "flake8>=6.0.0",
        "pyright>=1.1.0",
    ],
}

# Setup the package
if __name__ == '__main__':
    setup(
        name="mutator",
        version=get_version(),
        description="In-place redaction of struct-like fields and mapping entries driven by a hook registry.",
        long_description=mutator_readme,
        long_description_content_type="text/markdown",
        license="MIT",
        packages=find_packages(include=[PACKAGE, f"{PACKAGE}.*"]),
        install_requires=get_dependencies(),
        extras_require=extras_require,
        python_requires=">=3.9",
        classifiers=[
            "Development Status :: 4 - Beta",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: MIT License",
            "Operating System :: OS Independent",
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
            "Topic :: Software Development :: Libraries :: Python Modules",
            "Topic :: Security",
        ],
        keywords="redaction mutation masking reflection hooks",
        entry_points={
            "console_scripts": [
                "mutator=mutator.__main__:main",
            ],
        },
    )
