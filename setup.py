from setuptools import setup

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name='expr2latex',
    version='0.0.1',
    author='I. Chuang',
    author_email='ichuang@mit.edu',
    packages=['expr2latex', 'expr2latex.lib', 'expr2latex.test'],
    scripts=[],
    url='http://pypi.python.org/pypi/expr2latex/',
    license='LICENSE.txt',
    description='Embedded DSLs: Python math expressions to LaTeX, nested calls to HTML',
    long_description=long_description,
    long_description_content_type="text/markdown",
    include_package_data=True,
    python_requires='>=3.9',
    entry_points={
        'console_scripts': [
            'expr2latex = expr2latex.main:CommandLine',
            ],
        },
    install_requires=['numpy',
                      'lxml',
                      'path',
                      ],
    package_dir={'expr2latex': 'expr2latex'},
    test_suite="expr2latex.test",
)
