import re
import subprocess
from pathlib import Path

from setuptools import find_packages, setup


def get_version() -> str:
    try:
        output = subprocess.run(
            [
                "git", "--git-dir", Path(__file__).parent / ".git",
                "describe", "--tags"
            ],
            capture_output=True
        ).stdout.decode().strip().split("-")
    except FileNotFoundError:
        # git isn't installed
        output = [""]
    # Output is either v1.3.5 if the tag points to the current commit or
    # something like this v1.3.5-11-g3b467ad if it doesn't

    version = ".".join(re.findall(r"\d+", output[0])) or "0.dev0"
    if len(output) > 1:
        return f"{version}+{output[-1]}"
    else:
        return version


setup(
    name="pugmatch",
    version=get_version(),
    packages=find_packages(include=["pugmatch", "pugmatch.*"]),
    license="GPLv3",
    description="Role based team selection, balancing and skill rating for PUGs",
    python_requires=">=3.9",
    install_requires=[
        "humanize",
        "PyYAML",
        "sortedcontainers",
        "trueskill",
    ],
    extras_require={
        "test": [
            "hypothesis",
            "pytest",
            "pytest-mock",
        ],
    },
    include_package_data=True
)
