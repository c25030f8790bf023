"""Exceptions for use in Triple Threat"""

# Triple Threat
# Copyright (C) 2025  Triple Threat developers
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


class TripleThreatException(Exception):
    """Base exception for all Triple Threat errors.

    All custom exceptions in the application should inherit from this class.
    Expected "no solution" outcomes (an unfillable track, no volunteer) are
    never raised; they are returned as explicit results.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(TripleThreatException):
    """Base exception for pairing-related errors."""

    pass


class RepeatPairingException(PairingException):
    """Raised when a result would make two competitors meet twice in a track."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(TripleThreatException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class RoundNotFoundException(TournamentException):
    """Raised when a requested round does not exist."""

    pass


class MatchNotFoundException(TournamentException):
    """Raised when a requested match does not exist."""

    pass


class DuplicateCompetitorException(TournamentException):
    """Raised when attempting to register a competitor that already exists."""

    pass


# ========== Competitor Exceptions ==========


class CompetitorException(TripleThreatException):
    """Base exception for competitor-related errors."""

    pass


class CompetitorNotFoundException(CompetitorException):
    """Raised when a requested competitor cannot be found."""

    pass


class QuotaExceededException(CompetitorException):
    """Raised when a result would push a competitor past a track quota."""

    pass


# ========== Result Exceptions ==========


class ResultException(TripleThreatException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., winner not part of the match)."""

    pass


class DuplicateResultException(ResultException):
    """Raised when attempting to record a result that already exists."""

    pass


class ResultNotFoundException(ResultException):
    """Raised when a result is required but the match is undecided."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(TripleThreatException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


class MissingConfigurationException(ConfigurationException):
    """Raised when required configuration is missing."""

    pass
