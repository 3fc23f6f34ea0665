# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Exception and Warning Types

All errors raised by eulerflow derive from EulerflowError so callers can
catch the whole family in one place.

Taxonomy
--------
ConfigurationError : Invalid run parameters, raised before integration
EmptyResultError : The batch produced no points to bound or plot
RenderError : The chart could not be rendered or written
UnboundedPolicyWarning : A termination policy with no x or |y| bound
"""


class EulerflowError(Exception):
    """Base class for eulerflow errors"""
    pass


class ConfigurationError(EulerflowError, ValueError):
    """Raised when run parameters are invalid"""
    pass


class EmptyResultError(EulerflowError):
    """Raised when the trajectories contain zero points in total"""
    pass


class RenderError(EulerflowError):
    """Raised when the chart cannot be rendered or persisted"""
    pass


class UnboundedPolicyWarning(UserWarning):
    """Issued when only the iteration cap can stop an integration"""
    pass


def format_errors(header: str, errors) -> str:
    """
    Format a list of validation messages into one error string.

    Examples
    --------
    >>> print(format_errors("Invalid configuration", ["step_size must be > 0"]))
    Invalid configuration:
      • step_size must be > 0
    """
    lines = [f"{header}:"]
    lines.extend(f"  • {error}" for error in errors)
    return "\n".join(lines)


__all__ = [
    "EulerflowError",
    "ConfigurationError",
    "EmptyResultError",
    "RenderError",
    "UnboundedPolicyWarning",
    "format_errors",
]
