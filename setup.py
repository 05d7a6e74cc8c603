from setuptools import setup, find_packages

package_name = 'minimal_client'

setup(
    name=package_name,
    version='0.0.0',
    packages=find_packages(exclude=['test']),
    data_files=[
        ('share/ament_index/resource_index/packages', ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
    ],
    install_requires=['setuptools'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='jwson',
    maintainer_email='jwson@ssafy.local',
    description='Minimal AddTwoInts service client with ENDPOINTS-based name resolution',
    license='MIT',
    entry_points={
        'console_scripts': [
            'minimal_client = minimal_client.client:run',
            'resolve_endpoint = minimal_client.resolve_cli:run',
        ],
    },
)
