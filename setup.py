import re
from pathlib import Path

from setuptools import find_packages, setup  # type: ignore

match = re.search(r'__version__ = "(.*?)"', Path("athenai/version.py").read_text(encoding="utf-8"))
assert match
version = match.group(1)

readme = Path("README.md").read_text(encoding="utf-8")

setup(
    name="athenai",
    version=version,
    description="Multi-tenant REST API for managing gyms, exercises and workouts.",
    long_description=readme,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Web Environment",
        "Framework :: Flask",
        "Intended Audience :: Developers",
        "Natural Language :: English",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    ],
    packages=find_packages(include=["athenai", "athenai.*"]),
    package_data={"athenai": ["*", "*/*", "*/*/*"]},
    python_requires=">=3.10",
    install_requires=[
        "alembic >=1.12",
        "flask >=2.3",
        "psycopg2-binary >=2.9",
        "sqlalchemy >=2.0",
        "structlog >=23.1",
    ],
    extras_require={
        "devel": [
            "black >=21.9b0",
            "flake8 >=3",
            "isort >=5",
            "mypy >=0.910",
            "pylint >=2.11.0",
            "pytest >=7",
            "pytest-alembic >=0.10",
            "pytest-cov >=2.10.0",
            "pytest-xdist >=1.32.0",
        ]
    },
    entry_points={"console_scripts": ["athenai=athenai.cli:main"]},
)
