import os, sys

from dotenv import load_dotenv
load_dotenv()

from cflog import Client, CflogError, Severity

SEVERITY = os.getenv("SEVERITY", "INFO")

PAYLOAD = os.environ.get("PAYLOAD") or (sys.argv[1] if len(sys.argv) > 1 else None)
if not PAYLOAD:
    print("Usage: python scripts/write_entry.py <PAYLOAD>  (or export PAYLOAD=...)")
    raise SystemExit(2)


def main():
    try:
        with Client() as c:
            c.log(Severity.parse(SEVERITY), PAYLOAD)
            print(f"[done] wrote {SEVERITY} entry to {c.log_name}")
    except (CflogError, ValueError) as e:
        print(f"[error] {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
