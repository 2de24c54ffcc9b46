"""
Entry point for the Employee API
"""

from employee_api.main import run

if __name__ == "__main__":
    run()
