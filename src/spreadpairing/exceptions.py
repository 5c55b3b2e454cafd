"""Exceptions for use in Spread Pairing"""

# Spread Pairing
# Copyright (C) 2025  Spread Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


# ========== Base Application Exception ==========


class SpreadPairingException(Exception):
    """Base exception for all Spread Pairing errors.

    All custom exceptions in the library inherit from this class.
    This enables catching all library-specific errors with a single except clause.
    """

    pass


# ========== Data Exceptions ==========


class DataIntegrityError(SpreadPairingException):
    """Raised when scores, matches and roster disagree with each other.

    Examples are a score naming a competitor that is not on the roster,
    a match pairing a competitor with themselves, or two scores recorded
    for the same match. Pairing must not proceed until the data is fixed.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(SpreadPairingException):
    """Base exception for pairing-related errors."""

    pass


class InsufficientCompetitorsError(PairingException):
    """Raised when fewer than two competitors are eligible for a round."""

    pass


class ScheduleInfeasibleError(PairingException):
    """Raised when a round-robin cannot complete within the requested rounds."""

    pass


class InvalidPairingException(PairingException):
    """Raised when caller-supplied pairings are incomplete or inconsistent."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(SpreadPairingException):
    """Base exception for validation errors."""

    pass


class RatingValidationException(ValidationException):
    """Raised when a rating value is invalid."""

    pass


class ScoreValidationException(ValidationException):
    """Raised when a game score is invalid (for example negative)."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SpreadPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
