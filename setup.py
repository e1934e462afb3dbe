"""Setup configuration for issue_response_time"""

from setuptools import setup, find_packages

setup(
    name="issue-response-time",
    version="0.1.0",
    description=(
        "CLI tool measuring maintainer first-response time on community "
        "GitHub issues against a 48 business hour target."
    ),
    author="Issue Response Time Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "issue-response-time=issue_response_time.main:main",
        ],
    },
)
