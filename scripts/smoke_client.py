"""
Smoke client for checking a running PALM Assistant API
"""
import json
import logging
import time
from typing import Any, Dict, List

import requests

class AssistantSmokeClient:
    """Sends a handful of requests to the API and checks the response shapes"""

    def __init__(self, base_url: str = "http://localhost:5000", timeout: int = 60):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def _call(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            start_time = time.time()
            response = requests.request(method, f"{self.base_url}{path}",
                                        timeout=self.timeout, **kwargs)
            response_time = time.time() - start_time
        except requests.exceptions.Timeout:
            self.logger.error(f"{method} {path}: timeout")
            return {"success": False, "error": "timeout"}
        except requests.exceptions.RequestException as e:
            self.logger.error(f"{method} {path}: {e}")
            return {"success": False, "error": str(e)}

        if response.status_code != 200:
            self.logger.error(f"{method} {path} failed: {response.status_code}")
            return {"success": False, "error": f"HTTP {response.status_code}",
                    "response_time": response_time}

        self.logger.info(f"{method} {path} OK (RT: {response_time:.2f}s)")
        return {"success": True, "data": response.json(), "response_time": response_time}

    def _checks(self) -> List[Dict[str, Any]]:
        today = time.strftime("%Y-%m-%d")
        return [
            {"name": "health", "method": "GET", "path": "/health",
             "required": ["status"]},
            {"name": "route", "method": "POST", "path": "/agents/route",
             "json": {"message": "Find time to study for my exam"},
             "required": ["agent_domains", "primary_domain"]},
            {"name": "free_slots", "method": "GET", "path": "/free-slots",
             "params": {"date": today}, "required": ["slots"]},
            {"name": "conflicts", "method": "GET", "path": "/conflicts",
             "required": ["count", "conflicts"]},
            {"name": "goals", "method": "GET", "path": "/goals/progress",
             "required": ["goals"]},
            {"name": "chat", "method": "POST", "path": "/chat",
             "json": {"message": "Schedule a workout this week", "history": []},
             "required": ["content", "suggestions", "agent_domains"]},
        ]

    def run_checks(self) -> Dict[str, Any]:
        """Run all checks and summarize"""
        results = {
            "timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
            "checks": [],
            "summary": {"total": 0, "passed": 0, "failed": 0}
        }

        for check in self._checks():
            response = self._call(check["method"], check["path"],
                                  json=check.get("json"), params=check.get("params"))
            missing = []
            if response["success"]:
                missing = [f for f in check["required"] if f not in response["data"]]
            passed = response["success"] and not missing

            results["checks"].append({
                "name": check["name"],
                "passed": passed,
                "missing_fields": missing,
                "error": response.get("error"),
            })
            results["summary"]["total"] += 1
            results["summary"]["passed" if passed else "failed"] += 1

        return results

def main():
    import argparse

    parser = argparse.ArgumentParser(description='PALM Assistant smoke client')
    parser.add_argument('--url', default='http://localhost:5000', help='API base URL')
    parser.add_argument('--output', help='Output file for results')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    results = AssistantSmokeClient(args.url).run_checks()
    for check in results["checks"]:
        print(f"  {'✓' if check['passed'] else '✗'} {check['name']}")

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(results, f, indent=2)
        print(f"\nDetailed results saved to: {args.output}")

if __name__ == '__main__':
    main()
