#!/usr/bin/env python3
import sys
import time
from typing import Optional

import rclpy
from rclpy.node import Node

from example_interfaces.srv import AddTwoInts

from minimal_client.endpoints import resolve_endpoint, read_endpoints_env


class MinimalClient(Node):
    def __init__(self, endpoints_json: Optional[str] = None):
        super().__init__("minimal_client")

        # ===== params =====
        self.declare_parameter("endpoint_name", "REQUESTER_ENDPOINT")
        self.declare_parameter("default_service", "add_two_ints")
        self.declare_parameter("a", 41)
        self.declare_parameter("b", 1)
        self.declare_parameter("wait_interval_sec", 1.0)
        self.declare_parameter("wait_timeout_sec", 0.0)  # <= 0: until shutdown

        endpoint_name = str(self.get_parameter("endpoint_name").value)
        default_service = str(self.get_parameter("default_service").value)
        self.a = int(self.get_parameter("a").value)
        self.b = int(self.get_parameter("b").value)
        self.wait_interval_sec = float(self.get_parameter("wait_interval_sec").value)
        self.wait_timeout_sec = float(self.get_parameter("wait_timeout_sec").value)

        if endpoints_json is None:
            endpoints_json = read_endpoints_env()
        self.resolution = resolve_endpoint(
            endpoint_name, default_service, endpoints_json, logger=self
        )
        self.service_name = self.resolution.name

        self.cli = self.create_client(AddTwoInts, self.service_name)
        self.get_logger().info(
            f"Service: {self.service_name} ({self.resolution.status.value})"
        )

    def wait_for_service(self) -> bool:
        deadline = None
        if self.wait_timeout_sec > 0:
            deadline = time.monotonic() + self.wait_timeout_sec
        while not self.cli.wait_for_service(timeout_sec=self.wait_interval_sec):
            if not rclpy.ok():
                self.get_logger().error(
                    "client interrupted while waiting for service to appear."
                )
                return False
            if deadline is not None and time.monotonic() >= deadline:
                self.get_logger().error(
                    f"service {self.service_name} did not appear within "
                    f"{self.wait_timeout_sec:.1f}s"
                )
                return False
            self.get_logger().info("waiting for service to appear...")
        return True

    def send_request(self) -> Optional[int]:
        req = AddTwoInts.Request()
        req.a = self.a
        req.b = self.b

        future = self.cli.call_async(req)
        rclpy.spin_until_future_complete(self, future)

        if not future.done() or future.exception() is not None or future.result() is None:
            exc = future.exception() if future.done() else None
            if exc is not None:
                self.get_logger().error(f"service call failed :( {exc}")
            else:
                self.get_logger().error("service call failed :(")
            self.cli.remove_pending_request(future)
            return None

        res = future.result()
        self.get_logger().info(f"result of {req.a} + {req.b} = {res.sum}")
        return int(res.sum)


def main(args=None) -> int:
    rclpy.init(args=args)
    node = None
    try:
        try:
            node = MinimalClient()
        except Exception as e:
            rclpy.logging.get_logger("minimal_client").error(f"client setup failed: {e}")
            return 1
        if not node.wait_for_service():
            return 1
        if node.send_request() is None:
            return 1
        return 0
    except KeyboardInterrupt:
        return 1
    finally:
        if node is not None:
            node.destroy_node()
        rclpy.try_shutdown()


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
