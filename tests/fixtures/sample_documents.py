"""
Sample documents in every supported format for testing.
"""

USERS_JSON = """[
  {"id": 1, "name": "Alice", "age": 28, "active": true},
  {"id": 2, "name": "Bob", "age": 35, "active": false}
]"""

USERS_CSV = """id,name,age,active
1,Alice,28,true
2,Bob,35,false"""

NESTED_JSON = """{
  "users": [
    {"name": "Alice", "address": {"city": "Paris", "zip": "75001"}, "tags": ["admin", "dev"]},
    {"name": "Bob", "address": {"city": "Lyon", "zip": "69001"}, "tags": []}
  ],
  "meta": {"exported": "2024-01-15"}
}"""

USERS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<users>
  <user id="1">
    <name>Alice</name>
    <age>28</age>
  </user>
  <user id="2">
    <name>Bob</name>
    <age>35</age>
  </user>
</users>"""

USERS_YAML = """users:
  - name: Alice
    age: 28
    joined: 2024-01-15
  - name: Bob
    age: 35
    joined: 2023-06-01
"""

USERS_SQL = """-- exported rows
INSERT INTO users (id, name, note) VALUES
  (1, 'O''Brien', NULL),
  (2, 'Smith (Jr.)', 'likes a, b and c');"""

USERS_MARKDOWN = """| name  | note        |
| ----- | ----------- |
| Alice | x \\| y     |
| Bob   |             |"""

USERS_HTML = """<html>
<body>
  <p>Team members</p>
  <table>
    <thead><tr><th>Name</th><th>Age</th></tr></thead>
    <tbody>
      <tr><td>Alice</td><td>28</td></tr>
      <tr><td>Bob</td><td>35</td></tr>
    </tbody>
  </table>
</body>
</html>"""

INVALID_JSON = '{"name": "Alice", "age": 28,, "city": "Paris"}'

SAMPLE_FILES = {
    "users.json": USERS_JSON,
    "users.csv": USERS_CSV,
    "team.xml": USERS_XML,
    "team.yml": USERS_YAML,
    "dump.sql": USERS_SQL,
    "notes.md": USERS_MARKDOWN,
    "page.htm": USERS_HTML,
    "readme.txt": "not a data file",
}
