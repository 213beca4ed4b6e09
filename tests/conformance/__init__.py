"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the ledger.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. test_conservation.py - Supply changes only by emission
2. test_atomicity.py - Failed operations change nothing
3. test_non_negativity.py - No balance drops below zero
4. test_concurrency.py - Concurrent operations are linearizable

These tests use hypothesis for property-based testing.
"""
