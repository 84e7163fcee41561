from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()

requirements = [
    "psutil>=5.9.0",
    "requests>=2.32.4",
    "PyYAML>=6.0.3",
    "python-dotenv>=1.0.0",
    "rich>=13.0.0",
]

setup(
    name="hostwatch",
    version="0.1.0",
    author="hostwatch contributors",
    description="Host CPU and memory monitor with debounced WhatsApp alerts",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/hostwatch/hostwatch",
    packages=find_packages(include=["hostwatch", "hostwatch.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: System Administrators",
        "Topic :: System :: Monitoring",
        "Topic :: System :: Systems Administration",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "hostwatch=hostwatch.cli:main",
        ],
    },
    include_package_data=True,
)
