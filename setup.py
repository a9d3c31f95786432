import setuptools

setuptools.setup(
    name = 'splinepath',
    version = '1.0',
    description = 'editable 2D paths of Catmull-Rom and Bezier curves',
    packages = setuptools.find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=['numpy', 'scipy'],
    extras_require={'test': ['pytest']},
)
