"""Nagios plugins for Hadoop daemons' JMX servlets."""

__version__ = "0.2.0"
