from glob import glob
from setuptools import setup


setup(
    name='calcbrain',
    use_scm_version={
        'fallback_version': '0.1.0',
    },
    description='Stack calculator brain',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['calcbrain'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    setup_requires=[
        'setuptools_scm',
    ],
    tests_require=[
        'pytest',
        'pytest-cov',
        'coverage',
        'flake8',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
