from setuptools import setup, find_packages

setup(
    name="slipex",
    version="1.0.0",
    description="Classification, field extraction and validation for Canadian tax documents",
    packages=find_packages(include=['slipex', 'slipex.*']),
    package_data={'slipex.config': ['default_config.yaml']},
    include_package_data=True,
    python_requires='>=3.9',
    install_requires=[
        'pydantic>=2.0',
        'pyyaml',
        'click'
    ],
    extras_require={
        'test': [
            'pytest'
        ]
    },
    entry_points={
        'console_scripts': [
            'slipex=slipex.cli:cli'
        ]
    }
)
