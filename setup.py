from setuptools import setup

setup(
    name='dtflip',
    version='0.1',
    packages=['dtflip', 'dtflip.spatial'],
    install_requires=['numpy', 'pandas'],
    extras_require={'test': ['pytest']},
    license='MIT',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
