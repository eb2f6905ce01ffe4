"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='phobos-lang',
	version='0.0.1',
	packages=['phobos', "phobos.static", ],
	entry_points={
		'console_scripts': ["phobos = phobos.cmdline:main"],
	},
	license='MIT',
	description='Type-checker and Lua code generator for the Phobos language',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Compilers",
		"Environment :: Console",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
	extras_require={
		"test": ["pytest"],
	},
)
