"""
Setup file.
"""

from setuptools import setup

URL = "https://github.com/crossdist/crossdist"
KEYWORDS = "release packaging cargo rust cross-compile mingw strip zip tar"


if __name__ == "__main__":
    setup(
        keywords=KEYWORDS,
        url=URL,
        include_package_data=True)
