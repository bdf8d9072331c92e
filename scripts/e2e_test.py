"""
Smoke run against a live server.

    pip install -e .[e2e]
    OUTAGE_ADMIN_USERNAME=... OUTAGE_ADMIN_PASSWORD=... python scripts/e2e_test.py [base_url]

Uses a random X-Forwarded-For value so repeated runs are not rate limited.
"""
import os
import sys
import uuid

import requests


BASE = "http://127.0.0.1:3000"


def main() -> int:
    base = sys.argv[1] if len(sys.argv) > 1 else BASE
    fake_ip = f"e2e-{uuid.uuid4().hex[:8]}"
    s = requests.Session()

    # 1) health
    r = s.get(f"{base}/health", timeout=5)
    print("health:", r.status_code, r.text)

    # 2) report twice, second must be rate limited
    r = s.post(f"{base}/report", headers={"X-Forwarded-For": fake_ip}, timeout=10)
    print("report:", r.status_code, r.text)
    r = s.post(f"{base}/report", headers={"X-Forwarded-For": fake_ip}, timeout=10)
    print("report again:", r.status_code, r.text)
    if r.status_code != 429:
        return 1

    # 3) status
    r = s.get(f"{base}/status", timeout=10)
    data = r.json()
    print("status:", r.status_code, data.get("status"), "count=", data.get("count"))

    # 4) admin
    username = os.environ.get("OUTAGE_ADMIN_USERNAME")
    password = os.environ.get("OUTAGE_ADMIN_PASSWORD")
    if not username or not password:
        print("admin: skipped (credentials not set)")
        return 0
    r = s.post(f"{base}/admin/login", json={"username": username, "password": password}, timeout=10)
    print("login:", r.status_code, r.text)
    if r.status_code != 200:
        return 1
    r = s.get(f"{base}/admin/dashboard", timeout=10)
    print("dashboard:", r.status_code, "reports=", len(r.json().get("reports", [])))
    r = s.post(f"{base}/admin/blacklist", json={"ip": fake_ip, "reason": "e2e"}, timeout=10)
    print("blacklist add:", r.status_code, r.text)
    r = s.get(f"{base}/status", headers={"X-Forwarded-For": fake_ip}, timeout=10)
    print("status as blocked:", r.status_code, r.text)
    r = s.delete(f"{base}/admin/blacklist/{fake_ip}", timeout=10)
    print("blacklist remove:", r.status_code, r.text)
    r = s.post(f"{base}/admin/logout", timeout=10)
    print("logout:", r.status_code, r.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
