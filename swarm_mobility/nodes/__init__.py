"""
Swarm Rover — swarm_mobility/nodes/__init__.py

ROS 2 executables. Import the node modules explicitly; they require rclpy.
"""
