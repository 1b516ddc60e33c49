from pathlib import Path

from setuptools import find_packages, setup

ROOT = Path(__file__).parent
README = (ROOT / "README.md").read_text(encoding="utf-8") if (ROOT / "README.md").exists() else ""

setup(
    name="pysos",
    version="0.1.0",
    description="Stochastic Outlier Selection: perplexity-calibrated outlier probabilities",
    long_description=README,
    long_description_content_type="text/markdown",
    author="pysos Contributors",
    packages=find_packages(include=("pysos", "pysos.*")),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.19",
        "scipy>=1.5.1",
        "scikit-learn>=0.22.0",
        "joblib>=1.0.0",
    ],
    extras_require={
        "yaml": [
            "PyYAML>=5.4",
        ],
        "pyod": [
            "pyod>=1.1.0,<3.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pytest-xdist>=3.0.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
        ],
        "all": [
            "pysos[yaml,pyod,dev]",
        ],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords=[
        "anomaly-detection",
        "outlier-detection",
        "stochastic-outlier-selection",
        "perplexity",
        "machine-learning",
    ],
    entry_points={
        "console_scripts": [
            "pysos=pysos.cli:main",
        ],
    },
)
