#!/usr/bin/env python3
"""
Scene Splines: parametric control-point curves for scene descriptions
"""

import sys
from pathlib import Path
from setuptools import setup, find_packages

# Ensure we're using the right Python version
if sys.version_info < (3, 8):
    sys.exit("Python 3.8 or higher is required")

# Read the README file
def read_readme():
    """Read README.md for long description"""
    readme_path = Path(__file__).parent / "README.md"
    if readme_path.exists():
        with open(readme_path, "r", encoding="utf-8") as f:
            return f.read()
    return "Scene Splines: parametric control-point curves for scene descriptions"

# Core dependencies
INSTALL_REQUIRES = [
    "numpy>=1.21.0",
    "scipy>=1.7.0",
    "matplotlib>=3.4.0",
]

# Optional dependencies
EXTRAS_REQUIRE = {
    "dev": [
        "pytest>=6.2.0",
        "pytest-cov>=2.12.0",
        "black>=21.6.0",
        "isort>=5.9.0",
        "flake8>=3.9.0",
        "mypy>=0.910",
    ],
}

EXTRAS_REQUIRE["test"] = ["pytest>=6.2.0", "pytest-cov>=2.12.0"]

# Classifiers for PyPI
CLASSIFIERS = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.8",
    "Programming Language :: Python :: 3.9",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Software Development :: Libraries :: Python Modules"
]

def get_version():
    """Get version from package"""
    init_file = Path(__file__).parent / "scene_splines" / "__init__.py"
    if init_file.exists():
        with open(init_file, "r") as f:
            for line in f:
                if line.startswith("__version__"):
                    return line.split("=")[1].strip().strip('"').strip("'")

    # Default version
    return "1.0.0"

def main():
    """Main setup function"""
    setup(
        name="scene-splines",
        version=get_version(),
        description="Linear, cubic, TCB and X-spline curves with shared ownership and cached coefficients",
        long_description=read_readme(),
        long_description_content_type="text/markdown",
        packages=find_packages(exclude=["tests*", "docs*", "examples*"]),
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRE,
        python_requires=">=3.8",
        classifiers=CLASSIFIERS,
        keywords=[
            "splines",
            "interpolation",
            "catmull-rom",
            "kochanek-bartels",
            "x-splines",
            "animation",
        ],
        zip_safe=False,
    )

if __name__ == "__main__":
    main()
