"""Development tasks: python scripts.py <task>"""

import subprocess
import sys

SOURCES = ["src", "tests"]


def run_tests():
    subprocess.run(["pytest"], check=True)


def run_doctests():
    # Example blocks in docstrings double as doctests
    subprocess.run(["pytest", "--doctest-modules", "src/treeclip"], check=True)


def run_lint():
    subprocess.run(["flake8", "--max-line-length=120", *SOURCES], check=True)


def run_typecheck():
    subprocess.run(["mypy", "src/treeclip"], check=True)


def run_format():
    subprocess.run(["black", *SOURCES], check=True)


def run_coverage():
    subprocess.run(["pytest", "--cov=treeclip", "--cov-report=term-missing", "--cov-report=xml"], check=True)


TASKS = {name[len("run_") :]: task for name, task in list(globals().items()) if name.startswith("run_")}

if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        sys.exit(f"usage: python scripts.py {{{','.join(TASKS)}}}")
    TASKS[sys.argv[1]]()
