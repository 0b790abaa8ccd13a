#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — Mobility Launch (swarm_mobility)
----------------------------------------------
Starts one `mobility_node` for one rover.

The rover name is passed as the node's first command-line argument; it selects
the topic namespace ("<rover>/mode", "<rover>/velocity", ...) and the node
name "<rover>_MOBILITY".

Recommended usage
-----------------
ros2 launch swarm_mobility mobility.launch.py rover_name:=ajax
ros2 launch swarm_mobility mobility.launch.py rover_name:=hector params_file:=/path/to/swarm.yaml
"""

from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration, PathJoinSubstitution
from launch_ros.actions import Node
from launch_ros.substitutions import FindPackageShare


def generate_launch_description() -> LaunchDescription:
    pkg_share = FindPackageShare("swarm_mobility")

    # -------------------------------------------------------------------------
    # Launch arguments
    # -------------------------------------------------------------------------
    rover_name = LaunchConfiguration("rover_name")
    params_file = LaunchConfiguration("params_file")
    output = LaunchConfiguration("output")
    log_level = LaunchConfiguration("log_level")

    default_params = PathJoinSubstitution([pkg_share, "config", "mobility_params.yaml"])

    # -------------------------------------------------------------------------
    # Nodes
    # -------------------------------------------------------------------------
    mobility_node = Node(
        package="swarm_mobility",
        executable="mobility_node",
        output=output,
        parameters=[params_file],
        arguments=[rover_name, "--ros-args", "--log-level", log_level],
    )

    # -------------------------------------------------------------------------
    # Launch description
    # -------------------------------------------------------------------------
    return LaunchDescription(
        [
            DeclareLaunchArgument(
                "rover_name",
                default_value="ajax",
                description="Rover identity; must be a member of the configured roster.",
            ),
            DeclareLaunchArgument(
                "params_file",
                default_value=default_params,
                description="Parameter YAML (roster, timing, gains).",
            ),
            DeclareLaunchArgument(
                "output",
                default_value="screen",
                description="Node output mode (screen|log).",
            ),
            DeclareLaunchArgument(
                "log_level",
                default_value="info",
                description="ROS log level (debug|info|warn|error|fatal).",
            ),
            mobility_node,
        ]
    )
