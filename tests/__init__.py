"""
Test suite for Staking Energy

Contains:
- tests/unit/          : Unit tests for individual modules and the EnergyManager façade
"""
