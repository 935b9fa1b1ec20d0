"""Setup script for Ejecter."""

from setuptools import setup, find_packages
from pathlib import Path
import glob

# Read requirements
requirements_file = Path(__file__).parent / "requirements.txt"
requirements = []
if requirements_file.exists():
    with open(requirements_file) as f:
        requirements = [line.strip() for line in f if line.strip() and not line.startswith('#')]

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = ""
if readme_file.exists():
    with open(readme_file, encoding='utf-8') as f:
        long_description = f.read()

# Collect translation files
locale_files = []
for mo_file in glob.glob("locale/*/LC_MESSAGES/*.mo"):
    # Extract locale code (e.g., 'de' from 'locale/de/LC_MESSAGES/ejecter.mo')
    parts = Path(mo_file).parts
    if len(parts) >= 3:
        locale_code = parts[1]
        target_dir = f"share/locale/{locale_code}/LC_MESSAGES"
        locale_files.append((target_dir, [mo_file]))

setup(
    name="ejecter",
    version="1.0.0",
    author="Ejecter Team",
    description="Safe removal of USB drives with unsafe-removal warnings",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=requirements,
    extras_require={
        "journal": ["systemd-python"],
        "test": ["pytest"],
    },
    python_requires=">=3.11",
    data_files=locale_files,  # Install translation files to /usr/share/locale
    entry_points={
        "console_scripts": [
            "ejecterd=ejecter.daemon:main",
            "ejecter-cli=ejecter.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: BSD License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Desktop Environment",
        "Topic :: System :: Hardware",
    ],
)
