from setuptools import find_packages, setup
import io
import re


with io.open("README.md", encoding="utf-8") as f:
    long_description = f.read()

with io.open("requirements.txt", encoding="utf-8") as f:
    requirements = [r for r in f.read().split('\n') if len(r)]

# Not imported, as the package needs its requirements.
with io.open("minitree/__init__.py", encoding="utf-8") as f:
    version = re.search(r'__version__ = "([^"]+)"', f.read()).group(1)

setup(name="minitree",
      version=version,
      description="Format Miniscript and Policy expressions and draw them as trees",
      long_description=long_description,
      long_description_content_type="text/markdown",
      license="MIT",
      packages=find_packages(exclude=["tests", "tests.*"]),
      keywords=["bitcoin", "miniscript", "policy", "taproot", "descriptor"],
      install_requires=requirements,
      extras_require={"test": ["pytest"]},
      entry_points={"console_scripts": ["minitree=minitree.cli:main"]})
