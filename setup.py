from setuptools import setup, find_packages

setup(
    name="registration-validator",
    version="0.1.0",
    description="Declarative validation core for a bilingual registration form",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        'registration_validator': ['local-config.yaml', 'form-rules.yaml', 'messages.yaml'],
    },
    include_package_data=True,
    install_requires=[
        'pyyaml>=6.0',
        'jsonschema>=4.17.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'registration-validator-rpc=registration_validator.jsonrpc_server:main',
        ],
    },
    python_requires='>=3.9',
)
