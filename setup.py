from setuptools import setup

config = {
    'description': 'Buildfuncs - Namespaced build expression functions',
    'long_description': 'A registry and dispatcher for the built-in '
                        'functions available to build file expressions, '
                        'such as project::get-name() and target::exists().',
    'version': '0.3.0',
    'package_dir': {'': 'lib'},
    'packages': ['buildfuncs', 'buildfuncs.function_sets', 'unittest_ex'],
    'install_requires': ['Yapsy', 'PyYAML'],
    'extras_require': {'test': ['pytest']},
    'python_requires': '>=3.6',
    'name': 'buildfuncs'
}

setup(**config)
