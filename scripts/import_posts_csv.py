#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
import_posts_csv.py

Lê um CSV com as colunas "titulo" e "conteudo" e cria um post para cada linha
na API, autenticando como PROFESSOR.

ENV obrigatórias:
  IMPORT_EMAIL=professor@escola.com
  IMPORT_PASSWORD=...

ENV opcionais:
  API_BASE_URL=http://127.0.0.1:3000
  CSV_PATH=posts.csv
  REQUEST_TIMEOUT=30            (segundos)

Uso:
  IMPORT_EMAIL=... IMPORT_PASSWORD=... python3 scripts/import_posts_csv.py
"""

import csv
import os

import requests

API_BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:3000").rstrip("/")
CSV_PATH = os.getenv("CSV_PATH", "posts.csv")
TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "30"))


def die(msg: str, code: int = 1) -> None:
    print(f"[ERRO] {msg}")
    raise SystemExit(code)


def login(email: str, password: str) -> str:
    r = requests.post(
        f"{API_BASE_URL}/auth/login",
        json={"email": email, "password": password},
        timeout=TIMEOUT,
    )
    if r.status_code != 200:
        die(f"Login falhou ({r.status_code}): {r.text}")

    body = r.json()
    if body.get("user_type") != "PROFESSOR":
        die("Somente PROFESSOR pode criar posts.")
    return body["token"]


def read_rows(path: str):
    with open(path, newline="", encoding="utf-8") as csvfile:
        for row in csv.DictReader(csvfile):
            title = (row.get("titulo") or "").strip()
            content = (row.get("conteudo") or "").strip()
            if title and content:
                yield {"title": title, "content": content}


def main() -> None:
    email = os.getenv("IMPORT_EMAIL")
    password = os.getenv("IMPORT_PASSWORD")
    if not email or not password:
        die("IMPORT_EMAIL/IMPORT_PASSWORD não definidos.")

    token = login(email, password)
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }

    created, failed = 0, 0
    for item in read_rows(CSV_PATH):
        r = requests.post(f"{API_BASE_URL}/posts", json=item, headers=headers, timeout=TIMEOUT)
        if r.status_code == 201:
            created += 1
        else:
            failed += 1
            print(f"[WARN] {item['title']!r}: {r.status_code} {r.text}")

    print(f"Posts criados: {created} | falhas: {failed}")


if __name__ == "__main__":
    main()
