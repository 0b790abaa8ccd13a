#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — setup.py (ROS 2 Jazzy, ament_python package)
----------------------------------------------------------
Purpose:
- Package the Python modules under `swarm_mobility/`
- Install the ament index marker, package.xml, launch/ and config/
- Expose `mobility_node` as a console script for `ros2 run`

The core modules (roster, consensus, watchdog, state machine) have no ROS
dependency and are unit-tested with plain pytest.
"""

from glob import glob

from setuptools import find_packages, setup

package_name = "swarm_mobility"

setup(
    name=package_name,
    version="0.2.0",
    packages=find_packages(exclude=("test", "test.*")),
    include_package_data=True,
    data_files=[
        # ament index resource (required for ROS 2 package discovery)
        ("share/ament_index/resource_index/packages", [f"resource/{package_name}"]),
        # package manifest
        (f"share/{package_name}", ["package.xml"]),
        (f"share/{package_name}/launch", glob("launch/*.launch.py")),
        (f"share/{package_name}/config", glob("config/*.yaml")),
    ],
    install_requires=[
        "setuptools",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=False,
    maintainer="Swarm Rover Team",
    maintainer_email="swarm-rover@example.com",
    description=(
        "Swarm rover mobility node: manual/autonomous arbitration, velocity "
        "kill switch and neighbor-based heading consensus for ROS 2 Jazzy."
    ),
    license="MIT",
    tests_require=["pytest"],
    entry_points={
        "console_scripts": [
            "mobility_node = swarm_mobility.nodes.mobility_node:main",
        ],
    },
)
