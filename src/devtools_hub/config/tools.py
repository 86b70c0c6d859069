# Store for tools configuration
TOOLS = [
    {
        "id": "smart-paste",
        "name": "Smart Paste",
        "description": "Paste anything and get it recognised: JSON, JWT, Base64, URL, timestamp, hex colour, XML or YAML",
        "path": "/api/detect",
        "tags": ["detect", "paste", "json", "jwt", "base64", "url", "timestamp"],
        "icon": "🪄"
    },
    {
        "id": "base64-tool",
        "name": "Base64 Encoder/Decoder",
        "description": "Encode and decode Base64 with a likelihood score for pasted input",
        "path": "/api/codecs/base64",
        "tags": ["base64", "encoder", "decoder"],
        "icon": "🔤"
    },
    {
        "id": "url-encoder",
        "name": "URL Encoder/Decoder",
        "description": "Percent-encode and decode URL components",
        "path": "/api/codecs/url",
        "tags": ["url", "encoder", "decoder", "percent"],
        "icon": "🔗"
    },
    {
        "id": "text-encoder",
        "name": "Text Encoder",
        "description": "Convert text to and from hex, binary and HTML entities",
        "path": "/api/codecs",
        "tags": ["hex", "binary", "html", "entities", "encoder"],
        "icon": "🔣"
    },
    {
        "id": "json-formatter",
        "name": "JSON Formatter",
        "description": "Format, validate, and minify JSON data",
        "path": "/api/json",
        "tags": ["formatter", "json", "validator"],
        "icon": "📄"
    },
    {
        "id": "jwt-debugger",
        "name": "JWT Debugger",
        "description": "Decode JWT header and payload with readable iat, nbf and exp claims",
        "path": "/api/jwt/decode",
        "tags": ["jwt", "decoder", "token", "security", "json", "auth"],
        "icon": "🔑"
    },
    {
        "id": "xml-formatter",
        "name": "XML Formatter",
        "description": "Format, validate, and minify XML documents",
        "path": "/api/xml",
        "tags": ["formatter", "xml", "validator"],
        "icon": "📰"
    },
    {
        "id": "sql-formatter",
        "name": "SQL Formatter",
        "description": "Lay out SQL one clause per line and recase keywords",
        "path": "/api/sql",
        "tags": ["formatter", "sql", "database"],
        "icon": "🗃️"
    },
    {
        "id": "markdown-to-html",
        "name": "Markdown to HTML",
        "description": "Convert Markdown to HTML",
        "path": "/api/markdown/html",
        "tags": ["markdown", "html", "converter"],
        "icon": "📝"
    },
    {
        "id": "csv-converter",
        "name": "CSV Converter",
        "description": "Convert CSV to JSON, XML, YAML or SQL inserts",
        "path": "/api/csv/convert",
        "tags": ["csv", "converter", "json", "xml", "yaml", "sql"],
        "icon": "📊"
    },
    {
        "id": "json-yaml-xml-converter",
        "name": "JSON-YAML-XML Converter",
        "description": "Bidirectional conversion between JSON, YAML, and XML formats",
        "path": "/api/convert",
        "tags": ["converter", "json", "yaml", "xml", "format"],
        "icon": "🔄"
    },
    {
        "id": "text-diff",
        "name": "Text Diff Tool",
        "description": "Compare two texts line by line",
        "path": "/api/text-diff/compare",
        "tags": ["diff", "compare", "text"],
        "icon": "⚖️"
    },
    {
        "id": "regex-tester",
        "name": "Regex Tester",
        "description": "Test regular expressions with i, m, s, u and g flags",
        "path": "/api/regex/test",
        "tags": ["regex", "pattern", "match", "text"],
        "icon": "🔍"
    },
    {
        "id": "hash-generator",
        "name": "Hash Generator",
        "description": "MD5, SHA-1, SHA-256 and SHA-512 digests",
        "path": "/api/hash",
        "tags": ["hash", "md5", "sha", "checksum", "security"],
        "icon": "#️⃣"
    },
    {
        "id": "hmac-generator",
        "name": "HMAC Generator",
        "description": "Keyed message authentication codes",
        "path": "/api/hmac",
        "tags": ["hmac", "hash", "security", "signature"],
        "icon": "🔏"
    },
    {
        "id": "uuid-generator",
        "name": "UUID Generator",
        "description": "Generate version 1 and version 4 UUIDs",
        "path": "/api/uuid",
        "tags": ["uuid", "guid", "generator", "identifier"],
        "icon": "🆔"
    },
    {
        "id": "password-generator",
        "name": "Password Generator",
        "description": "Random passwords from selectable character classes",
        "path": "/api/password",
        "tags": ["password", "generator", "security", "random"],
        "icon": "🔐"
    },
    {
        "id": "encryption-tools",
        "name": "Encryption Tools",
        "description": "Password based AES-GCM encryption and decryption",
        "path": "/api/encrypt",
        "tags": ["encryption", "aes", "security", "decrypt"],
        "icon": "🛡️"
    },
    {
        "id": "timestamp-converter",
        "name": "Timestamp Converter",
        "description": "Convert between Unix timestamps and ISO-8601 dates",
        "path": "/api/timestamp/convert",
        "tags": ["timestamp", "unix", "epoch", "date", "time"],
        "icon": "⏰"
    },
    {
        "id": "file-analyzer",
        "name": "File Analyzer",
        "description": "File size, encoding, line, character and word statistics with entropy",
        "path": "/api/file/analyze",
        "tags": ["file", "statistics", "encoding", "entropy"],
        "icon": "📁"
    },
]
