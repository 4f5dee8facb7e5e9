"""
PID Controller
Drives a scalar toward a setpoint one tick at a time
"""

import logging

logger = logging.getLogger(__name__)


class PIDController:
    """
    PID controller with tick-supplied time steps

    Features:
    - Proportional, Integral, Derivative control
    - Output limits
    - Integral anti-windup
    """

    def __init__(
        self,
        kp: float = 4.0,
        ki: float = 0.5,
        kd: float = 0.2,
        output_min: float = -5.0,
        output_max: float = 5.0,
        integral_limit: float = 10.0
    ):
        """
        Initialize PID controller.

        Args:
            kp: Proportional gain
            ki: Integral gain
            kd: Derivative gain
            output_min: Minimum output
            output_max: Maximum output
            integral_limit: Absolute bound of the accumulated integral
        """
        self.kp = kp
        self.ki = ki
        self.kd = kd
        self.output_min = output_min
        self.output_max = output_max
        self.integral_limit = integral_limit

        self.integral = 0.0
        self.last_error = None

    def update(self, error: float, dt: float) -> float:
        """
        Update PID controller.

        Args:
            error: Setpoint minus measurement
            dt: Time since the previous update (seconds)

        Returns:
            Control output
        """
        if dt <= 0:
            dt = 0.01  # Prevent division by zero

        p_term = self.kp * error

        self.integral += error * dt
        self.integral = max(-self.integral_limit, min(self.integral_limit, self.integral))
        i_term = self.ki * self.integral

        # No derivative kick on the first sample
        d_term = 0.0 if self.last_error is None else self.kd * (error - self.last_error) / dt

        output = p_term + i_term + d_term
        output = max(self.output_min, min(self.output_max, output))

        self.last_error = error

        logger.debug(f"PID: error={error:.3f}, P={p_term:.3f}, I={i_term:.3f}, D={d_term:.3f}, output={output:.3f}")

        return output

    def reset(self) -> None:
        """Reset PID state"""
        self.integral = 0.0
        self.last_error = None

    def set_gains(self, kp: float, ki: float, kd: float) -> None:
        """Update PID gains"""
        self.kp = kp
        self.ki = ki
        self.kd = kd
