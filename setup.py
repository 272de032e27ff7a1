from setuptools import setup
from pathlib import Path

HERE = Path(__file__).parent


def parse_requirements(filename):
    return [line.strip() for line in (HERE / filename).read_text().splitlines()
            if line.strip() and not line.startswith("#")]


test_requirements = parse_requirements("requirements-test.txt")

setup(
    install_requires=parse_requirements("requirements.txt"),
    extras_require={"test": test_requirements, "dev": test_requirements}
)
