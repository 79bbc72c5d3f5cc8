#!/usr/bin/env python3
"""
Main test runner for the Kaleidoscope front end tests.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_all_tests():
    """Run all Kaleidoscope front end tests."""

    print("🚀 Kaleidoscope Front End Test Suite")
    print("=" * 60)

    # Test if basic imports work
    try:
        from kaleidoscope.lexer import Lexer
        from kaleidoscope.parser import Parser
        from kaleidoscope.driver import TopLevelDriver

        print("✅ All front end modules imported successfully")
        print()

    except ImportError as e:
        print(f"❌ Failed to import front end modules: {e}")
        return False

    # Smoke test the whole pipeline before the unit tests
    print("Testing simple parse pipeline...")
    try:
        from kaleidoscope.driver import parse_string
        from kaleidoscope.parser import dump

        code = """
        # add two numbers
        def add(a b) a + b;
        extern sin(x);
        add(sin(1), 2) * 3;
        """

        session = parse_string(code)
        if session.has_errors():
            print(f"     ❌ Syntax errors: {len(session.errors)}")
            for error in session.errors:
                print(f"        {error}")
            return False

        print(f"     Parsed {len(session.items)} top-level constructs")
        for item in session.items:
            print(f"       {dump(item)}")
        print("✅ Parse pipeline test PASSED")
        print()

    except Exception as e:
        print(f"❌ Parse pipeline test FAILED: {e}")
        import traceback
        traceback.print_exc()
        return False

    print("Running unit tests...")
    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=1).run(suite)

    print()
    if result.wasSuccessful():
        print("🎉 All tests PASSED!")
    else:
        print(f"❌ {len(result.failures)} failures, {len(result.errors)} errors")
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
