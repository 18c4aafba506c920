from glob import glob
from setuptools import setup


TESTS_REQUIRE = [
    'pytest',
    'pytest-cov',
    'coverage',
    'flake8',
    'bandit',
    'mypy',
    'safety',
]


setup(
    name='infix',
    use_scm_version={
        'fallback_version': '0.1.0',
    },
    description='Infix arithmetic calculator, by way of RPN',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['infix'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.7',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    setup_requires=[
        'setuptools_scm',
    ],
    extras_require={
        'test': TESTS_REQUIRE,
    },
    scripts=glob('bin/*'),
    license='ISC',
)
