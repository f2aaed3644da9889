# Trigger an odds sync against a running TokenToss API and print a summary.
import httpx


def prompt(text: str, default: str | None = None) -> str:
    hint = f" [{default}]" if default is not None else ""
    value = input(f"{text}{hint}: ").strip()
    return value or (default or "")


def prompt_yes_no(text: str, default: bool = False) -> bool:
    suffix = "Y/n" if default else "y/N"
    value = input(f"{text} ({suffix}): ").strip().lower()
    if not value:
        return default
    return value in {"y", "yes"}


def call_api(client: httpx.Client, method: str, path: str, params: dict | None = None):
    print(f"-> {method} {path} {params or ''}".strip())
    response = client.request(method, path, params=params, timeout=60)
    response.raise_for_status()
    return response.json()


def print_summary(data: dict):
    print(f"   provider called: {data['did_call_provider']}")
    print(f"   last api call:   {data['last_api_call']}")
    if data.get("usage"):
        print(f"   requests left:   {data['usage']['requests_remaining']}")
    if data.get("partial_failure"):
        print(f"   WARNING: {data['partial_failure']}")
    for game in data["games"]:
        odds = game["odds"] or {}
        print(
            f"   {game['away_team']} @ {game['home_team']}  "
            f"{odds.get('away_moneyline', 'N/A')} / {odds.get('home_moneyline', 'N/A')}"
        )


def main():
    print("TokenToss odds sync")
    base_url = prompt("API base URL", "http://127.0.0.1:8000")
    force = prompt_yes_no("Force refresh (spends one odds api request)", False)

    with httpx.Client(base_url=base_url) as client:
        if force:
            data = call_api(client, "POST", "/games/refresh")
        else:
            data = call_api(client, "GET", "/games")

    print_summary(data)


if __name__ == "__main__":
    main()
