from setuptools import setup, find_packages

setup(
    name="absence-seasons",
    version="1.0.0",
    packages=find_packages(),
    install_requires=[
        "pandas>=2.3.1",
        "numpy>=2.0.2",
        "plotly>=6.2.0",
        "matplotlib>=3.9.4",
        "seaborn>=0.13.2",
        "pyyaml>=6.0",
        "pydantic>=2.0"
    ],
    extras_require={
        "test": [
            "pytest>=8.0"
        ],
    },
    author="Your Name",
    description="Seasonal and flu-season absence charts from daily school attendance data",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Topic :: Scientific/Engineering :: Visualization",
    ],
    entry_points={
        'console_scripts': [
            'absence-seasons=absence_seasons.runner.cli:main',
        ],
    },
    include_package_data=True,
    package_data={
        'absence_seasons': [
            'data/config/*.yaml'
        ],
    },
)
