"""Thread safe — sanitize 1000 docs in parallel."""

from concurrent.futures import ThreadPoolExecutor

from mdguard import sanitize

docs = [
    f"# Doc {i}\n\nContent for document {i} <img src=x onerror=alert({i})>" for i in range(1000)
]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(sanitize, docs))

print(f"Sanitized {len(results)} documents in parallel")
print("First doc:", results[0])
print("Handlers left:", sum("onerror" in html for html in results))
