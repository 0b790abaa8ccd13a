#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Swarm Rover — swarm_mobility/nodes/mobility_node.py
---------------------------------------------------
ROS 2 Jazzy mobility node for one swarm rover.

Purpose
-------
Thin transport adapter around `MobilityContext`: it owns the subscriptions,
publishers and timers, converts ROS messages to core values and forwards each
callback to the matching context handler. No control logic lives here.

Topics (all names built from the rover name, e.g. "ajax/mode")
---------------------------------------------------------------
Subscribe:
- <rover>/joystick                (geometry_msgs/Twist)   manual drive
- <rover>/mode                    (std_msgs/UInt8)        control mode code
- <rover>/targets                 (std_msgs/String)       accepted, unused
- <rover>/obstacle                (std_msgs/UInt8)        accepted, unused
- <rover>/odom/ekf                (nav_msgs/Odometry)     self pose
- messages                        (std_msgs/String)       accepted, unused
- pose                            (std_msgs/String)       swarm pose broadcasts

Publish:
- <rover>/velocity                (geometry_msgs/Twist)
- <rover>/state_machine           (std_msgs/String, latched)
- <rover>/status                  (std_msgs/String, latched)
- <rover>/angular                 (std_msgs/String, latched)
- <rover>/global_average_heading  (std_msgs/Float32, latched)
- <rover>/local_averaging_heading (std_msgs/Float32, latched)
- messages                        (std_msgs/String, latched)
- pose                            (std_msgs/String, latched)
- targetsCollected                (std_msgs/Int16, latched)

Timers
------
- state machine tick      (loop_period_s, default 0.1 s)
- watchdog check          (watchdog_check_period_s, default 1.0 s)
- liveness/status publish (status_publish_period_s, default 5.0 s)

Usage
-----
ros2 run swarm_mobility mobility_node ajax
ros2 run swarm_mobility mobility_node          # rover name = hostname
"""

from __future__ import annotations

import socket
import sys
import traceback
from typing import List, Optional, Sequence

import rclpy
from rclpy.node import Node
from rclpy.qos import DurabilityPolicy, HistoryPolicy, QoSProfile, ReliabilityPolicy
from rclpy.signals import SignalHandlerOptions
from rclpy.utilities import remove_ros_args

from geometry_msgs.msg import Twist
from nav_msgs.msg import Odometry
from std_msgs.msg import Float32, Int16, String, UInt8

from swarm_mobility.constants import (
    NODE_NAME_SUFFIX,
    TOPIC_ANGULAR,
    TOPIC_GLOBAL_HEADING,
    TOPIC_JOYSTICK,
    TOPIC_LOCAL_HEADING,
    TOPIC_MESSAGES,
    TOPIC_MODE,
    TOPIC_OBSTACLE,
    TOPIC_ODOMETRY,
    TOPIC_POSE,
    TOPIC_STATE_MACHINE,
    TOPIC_STATUS,
    TOPIC_TARGETS,
    TOPIC_TARGETS_COLLECTED,
    TOPIC_VELOCITY,
    rover_topic,
)
from swarm_mobility.control.velocity import VelocityCommand
from swarm_mobility.exceptions import RosterConfigError
from swarm_mobility.mobility_context import MobilityContext
from swarm_mobility.models.pose import Pose2D
from swarm_mobility.ros.params import read_mobility_params
from swarm_mobility.utils.logging import get_logger_adapter, log_event
from swarm_mobility.version import get_package_version_info


# =============================================================================
# Helpers
# =============================================================================
def resolve_rover_name(argv: Optional[Sequence[str]] = None) -> str:
    """
    First non-ROS command-line argument, or the hostname when none is given.
    """
    raw = list(sys.argv if argv is None else argv)
    user_args = remove_ros_args(args=raw)[1:]
    for arg in user_args:
        name = str(arg).strip()
        if name:
            return name
    return socket.gethostname()


def _latched_qos(depth: int = 1) -> QoSProfile:
    return QoSProfile(
        reliability=ReliabilityPolicy.RELIABLE,
        durability=DurabilityPolicy.TRANSIENT_LOCAL,
        history=HistoryPolicy.KEEP_LAST,
        depth=depth,
    )


# =============================================================================
# Output sink (MobilityOutputs implemented with rclpy publishers)
# =============================================================================
class RosMobilityOutputs:
    def __init__(self, node: Node, rover_name: str) -> None:
        latched_1 = _latched_qos(1)
        latched_10 = _latched_qos(10)

        self.pub_velocity = node.create_publisher(Twist, rover_topic(rover_name, TOPIC_VELOCITY), 10)
        self.pub_state_machine = node.create_publisher(
            String, rover_topic(rover_name, TOPIC_STATE_MACHINE), latched_1
        )
        self.pub_status = node.create_publisher(String, rover_topic(rover_name, TOPIC_STATUS), latched_1)
        self.pub_angular = node.create_publisher(String, rover_topic(rover_name, TOPIC_ANGULAR), latched_1)
        self.pub_global_heading = node.create_publisher(
            Float32, rover_topic(rover_name, TOPIC_GLOBAL_HEADING), latched_1
        )
        self.pub_local_heading = node.create_publisher(
            Float32, rover_topic(rover_name, TOPIC_LOCAL_HEADING), latched_1
        )

        self.pub_messages = node.create_publisher(String, TOPIC_MESSAGES, latched_10)
        self.pub_pose = node.create_publisher(String, TOPIC_POSE, latched_10)
        self.pub_targets_collected = node.create_publisher(Int16, TOPIC_TARGETS_COLLECTED, latched_1)

    @staticmethod
    def _string(text: str) -> String:
        msg = String()
        msg.data = str(text)
        return msg

    def publish_velocity(self, command: VelocityCommand) -> None:
        msg = Twist()
        msg.linear.x = float(command.linear)
        msg.angular.z = float(command.angular)
        self.pub_velocity.publish(msg)

    def publish_state_machine(self, text: str) -> None:
        self.pub_state_machine.publish(self._string(text))

    def publish_status(self, text: str) -> None:
        self.pub_status.publish(self._string(text))

    def publish_message(self, text: str) -> None:
        self.pub_messages.publish(self._string(text))

    def publish_pose(self, text: str) -> None:
        self.pub_pose.publish(self._string(text))

    def publish_headings(self, global_heading: float, local_heading: float) -> None:
        global_msg = Float32()
        global_msg.data = float(global_heading)
        local_msg = Float32()
        local_msg.data = float(local_heading)
        self.pub_global_heading.publish(global_msg)
        self.pub_local_heading.publish(local_msg)

    def publish_angular(self, text: str) -> None:
        self.pub_angular.publish(self._string(text))

    def publish_targets_collected(self, count: int) -> None:
        msg = Int16()
        msg.data = int(count)
        self.pub_targets_collected.publish(msg)


# =============================================================================
# Node
# =============================================================================
class MobilityNode(Node):
    def __init__(self, rover_name: str) -> None:
        self.rover_name = str(rover_name).strip()
        super().__init__(f"{self.rover_name}{NODE_NAME_SUFFIX}")

        self._log = get_logger_adapter(self)
        self.params = read_mobility_params(self)

        self.outputs = RosMobilityOutputs(self, self.rover_name)
        # Raises RosterConfigError before any subscription exists.
        self.context = MobilityContext(
            self.params.to_config(self.rover_name),
            self.outputs,
            logger=self._log,
        )

        # ---------------------------------------------------------------------
        # Subscribers
        # ---------------------------------------------------------------------
        name = self.rover_name
        self.sub_joystick = self.create_subscription(Twist, rover_topic(name, TOPIC_JOYSTICK), self._on_joystick, 10)
        self.sub_mode = self.create_subscription(UInt8, rover_topic(name, TOPIC_MODE), self._on_mode, 1)
        self.sub_targets = self.create_subscription(String, rover_topic(name, TOPIC_TARGETS), self._on_targets, 10)
        self.sub_obstacle = self.create_subscription(UInt8, rover_topic(name, TOPIC_OBSTACLE), self._on_obstacle, 10)
        self.sub_odometry = self.create_subscription(
            Odometry, rover_topic(name, TOPIC_ODOMETRY), self._on_odometry, 10
        )
        self.sub_messages = self.create_subscription(String, TOPIC_MESSAGES, self._on_message, 10)
        self.sub_pose = self.create_subscription(String, TOPIC_POSE, self._on_pose, 10)

        # ---------------------------------------------------------------------
        # Timers
        # ---------------------------------------------------------------------
        self.status_timer = self.create_timer(self.params.status_publish_period_s, self._status_tick)
        self.watchdog_timer = self.create_timer(self.params.watchdog_check_period_s, self._watchdog_tick)
        self.loop_timer = self.create_timer(self.params.loop_period_s, self._loop_tick)

        self.context.start()

        log_event(
            self._log,
            "startup",
            component="mobility_node",
            details={
                "version": get_package_version_info().banner(self.rover_name),
                "slot": self.context.roster.self_slot,
                "roster": ",".join(self.context.roster.config.identities),
                "loop_s": self.params.loop_period_s,
                "kill_switch_s": self.params.kill_switch_timeout_s,
                "watchdog_check_s": self.params.watchdog_check_period_s,
            },
        )

    # =========================================================================
    # Subscription callbacks
    # =========================================================================
    def _on_joystick(self, msg: Twist) -> None:
        self.context.on_manual_command(float(msg.linear.x), float(msg.angular.z))

    def _on_mode(self, msg: UInt8) -> None:
        self.context.on_mode(int(msg.data))

    def _on_targets(self, msg: String) -> None:
        self.context.on_target(msg.data)

    def _on_obstacle(self, msg: UInt8) -> None:
        self.context.on_obstacle(int(msg.data))

    def _on_message(self, msg: String) -> None:
        self.context.on_message(msg.data)

    def _on_odometry(self, msg: Odometry) -> None:
        p = msg.pose.pose.position
        q = msg.pose.pose.orientation
        self.context.on_self_pose(Pose2D.from_odometry(p.x, p.y, q.x, q.y, q.z, q.w))

    def _on_pose(self, msg: String) -> None:
        self.context.on_pose_broadcast(msg.data)

    # =========================================================================
    # Timer callbacks
    # =========================================================================
    def _loop_tick(self) -> None:
        self.context.state_machine_tick()

    def _watchdog_tick(self) -> None:
        self.context.watchdog_tick()

    def _status_tick(self) -> None:
        self.context.status_tick()

    # =========================================================================
    # Shutdown
    # =========================================================================
    def _cancel_timers(self) -> List[str]:
        cancelled = []
        for label in ("loop_timer", "watchdog_timer", "status_timer"):
            timer = getattr(self, label, None)
            if timer is not None:
                timer.cancel()
                cancelled.append(label)
        return cancelled

    def destroy_node(self) -> bool:
        try:
            self._cancel_timers()
            self.context.shutdown()
            log_event(self._log, "shutdown", component="mobility_node", details=self.context.summary())
        finally:
            destroyed = super().destroy_node()
        return destroyed


# =============================================================================
# Entry point
# =============================================================================
def main(args=None) -> None:
    # Ctrl-C arrives as KeyboardInterrupt with the context still valid,
    # so destroy_node() can still publish the final stop.
    rclpy.init(args=args, signal_handler_options=SignalHandlerOptions.NO)
    rover_name = resolve_rover_name(args)
    node: Optional[MobilityNode] = None
    try:
        node = MobilityNode(rover_name)
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    except RosterConfigError as e:
        print(f"[mobility_node] Refusing to start: {e}", file=sys.stderr)
    except Exception as e:
        print(f"[mobility_node] Fatal error: {e}", file=sys.stderr)
        traceback.print_exc()
    finally:
        try:
            if node is not None:
                node.destroy_node()
        finally:
            if rclpy.ok():
                rclpy.shutdown()


if __name__ == "__main__":
    main()
