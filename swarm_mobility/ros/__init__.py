"""
Swarm Rover — swarm_mobility/ros/__init__.py

ROS-facing helpers. Importing this package requires rclpy.
"""
