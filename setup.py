from setuptools import setup

setup(
    name = 'idmap',
    version  = '0.1',
    description = 'Scoped identity map for record mappers, with a MariaDB/MySQL mapper',
    license = 'GPL',
    packages = [ 'idmap', 'idmap.db' ],
    python_requires = '>=3.7',
    install_requires = [
        'pyyaml >= 5.1',
        'mysql-connector-python >= 8.0'
    ],
    scripts = [
       'bin/idmap'
    ],
    extras_require = {
        'test': [ 'pytest' ]
    }
)
