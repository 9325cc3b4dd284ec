# ddnsutil

Building blocks for a dynamic DNS client: request signing for several DNS
provider APIs, IP change tracking, address checks, DNS lookups, localised log
messages and updating an installed executable from a published release.

## Installation

Python 3.10 or later. The package depends on `requests`, `bcrypt` and
`dnspython`. The `test` extra adds `pytest` and `responses`.

## Modules

- `ddnsutil.semver` – `parse(text)` turns `v1.2.3-beta+build` style text into
  a `Version` (major, minor, patch; missing parts are 0). `Version` has
  `compare`, `greater_than` and `greater_than_or_equal`; pre-release and build
  parts are ignored. Invalid text raises `InvalidVersionError`.
- `ddnsutil.textutil` – `write_string`, `to_hostname`, `split_lines`,
  `should_escape`, `escape` (percent-encodes everything outside
  `A-Z a-z 0-9 _ - ~ .`) and `ordinal` (English ordinals; `"zh"` gives the
  bare number).
- `ddnsutil.environment` – `is_termux`, `is_run_in_docker`,
  `get_config_file_path` (from `DDNS_CONFIG_FILE_PATH`, else
  `get_config_file_path_default`, a `.ddns_go_config.yaml` in the home
  directory) and `open_explorer`, which starts the platform's browser opener
  and returns whether it was launched.
- `ddnsutil.ipcache` – `IpCache.check(new_addr)` returns `True` when the
  address differs from the last one, when it is empty, or when the countdown of
  unchanged checks runs out. The countdown comes from the
  `DDNS_IP_CACHE_TIMES` environment variable and is 5 when that is unset or
  not a number.
- `ddnsutil.netaddr` – `is_private_network` recognises loopback, private and
  link-local addresses, with or without a port; `get_request_ip_str`
  describes a client address together with its `X-Real-IP` and
  `X-Forwarded-For` headers.
- `ddnsutil.passwords` – `hash_password`, `password_ok`,
  `is_hashed_password` (bcrypt) and `generate_token`, a random base64
  HMAC-SHA256 token.
- `ddnsutil.messages` – `log_str` formats a message key (`%s`, `%d`, `%q`)
  and translates it into English unless `init_log_lang` was given a locale
  starting with `zh`; `log` writes the result to the `ddnsutil` logger at
  INFO level.
- `ddnsutil.memlogs` – `MemoryLogs`, a text sink that keeps the last
  `max_num` entries (50 by default), with `write`, `to_json` and `clear`.
- `ddnsutil.webresult` – `Result` with `to_json`, and the constructors
  `error_result(msg)` (code 500) and `ok_result(msg, data)` (code 200).
- `ddnsutil.httpclient` – `create_http_client` (a `requests` session with a
  30 second timeout that honours proxy settings from the environment),
  `create_no_proxy_http_client(network)` (no proxy, no keep-alive, IPv6 for
  `"tcp6"` and IPv4 otherwise) and `set_insecure_skip_verify`.
  `get_http_response_raw` reads at most 1,024,000 bytes of a body and raises
  `HTTPResponseError` for any status of 300 or above; `get_http_response`
  decodes the body as JSON, giving `None` for an empty body.
- `ddnsutil.httprequest` – `HttpRequest`, a small mutable request model
  (method, URL parts, multi-valued headers, body) used by the signers.
- Request signers:
  - `ddnsutil.huawei` – `Signer(key, secret).sign(request)` sets the
    `X-Sdk-Date` header when missing and the `Authorization` header
    (`SDK-HMAC-SHA256`); the canonical request pieces are exposed as
    functions.
  - `ddnsutil.baidu` – `baidu_signer(access_key_id, access_secret, request)`
    (`bce-auth-v1`).
  - `ddnsutil.aliyun` – `aliyun_signer(access_key_id, access_secret, params)`
    adds the common parameters and the `Signature` to a mapping of value lists;
    `hmac_sign` and `hmac_sign_to_b64` support HMAC-SHA1, HMAC-SHA256 and
    HMAC-MD5.
  - `ddnsutil.tencent` – `tencent_cloud_signer(secret_id, secret_key, request,
    action, payload)` (`TC3-HMAC-SHA256`).
  - `ddnsutil.volcengine` – `traffic_route_signer(method, query, header, ak,
    sk, action, body)` builds and returns a signed `HttpRequest`.
- `ddnsutil.resolver` – `lookup_host(url)` resolves the host of a URL and
  raises `OSError` on failure; `set_dns` switches to a given server
  (`1.1.1.1`, `tcp://1.1.1.1:53`); `init_backup_dns` picks backup servers;
  `wait_internet(addresses)` blocks until a name resolves, retrying every five
  seconds and moving to the backup servers when the local resolver fails.
- Self-update:
  - `ddnsutil.release` – `get_latest`, `detect_latest` and the asset
    matching helpers choose the asset whose name ends with
    `<os>_<arch>.zip` or `<os>_<arch>.tar.gz`.
  - `ddnsutil.archive` – `decompress_command` extracts the executable from a
    `.zip` or `.tar.gz` archive (other names pass through unchanged);
    `apply_update` replaces a file via `.new` and `.old` copies and rolls back
    if the final rename fails; `decompress_and_update` does both.
  - `ddnsutil.selfupdate` – `self_update(version)` checks the repository named
    by `UPDATE_REPOSITORY`, and when a newer release exists downloads it with
    `download_asset` and installs it over the running program with
    `update_to`. It returns whether an update was installed.

## Examples

```python
from ddnsutil.semver import parse

current = parse("v6.1")
latest = parse("6.2.0")
print(str(current))                  # 6.1.0
print(latest.greater_than(current))  # True
```

```python
from ddnsutil.netaddr import is_private_network

is_private_network("192.168.1.18:9876")  # True
is_private_network("[2409::1]:9876")     # False
```

```python
from ddnsutil.textutil import ordinal

ordinal(21, "en")   # "21st"
ordinal(212, "en")  # "212th"
```

```python
from ddnsutil.passwords import hash_password, is_hashed_password, password_ok

password = "password"
hashed = hash_password(password)
assert is_hashed_password(hashed)
assert password_ok(hashed, password)
```

```python
from ddnsutil.archive import match_executable_name

match_executable_name("ddns-go", "ddns-go.exe")           # True
match_executable_name("ddns-go", "ddns-go_linux_x86_64")  # False
```

## Errors

Failures are raised: `InvalidVersionError` for bad versions,
`HTTPResponseError` for responses of 300 or above, `OSError` for failed
lookups and downloads, and `CannotDecompressFileError` or
`ExecutableNotFoundInArchiveError` for archives that cannot be read or do not
hold the executable.

## What it does not do

This is a library only. It has no command-line program, no web server or
configuration pages, no configuration file reading or writing, and no code
that talks to DNS providers to create or update records: it signs requests for
those APIs, but sending them and reading the results is left to the caller.