# banking

A small banking service that keeps accounts and their transaction history in
memory and exposes them over a JSON HTTP API built on Flask. Balances are exact
decimals and are reported with two decimal places. Deposits, withdrawals and
transfers lock the accounts involved, so they are safe to run from many
threads at once; transfers lock accounts in id order to avoid deadlock.

## Installing

    pip install .

For the test suite:

    pip install ".[test]"
    pytest

## Running the server

    banking-server
    banking-server -c path/to/config.yaml

Without `-c` the server reads `./config/config.yaml`. The name is also tried
with a `.yaml` suffix and looked up in the current directory and in `config/`.
If no file is found, built-in defaults are used: debug mode, port 8080, and
logging to standard output at `info` level in console format, with no log
files. A configuration file looks like this:

    server:
      mode: release        # debug, release or test
      port: "8080"
    logger:
      level: info          # debug, info, warn or error
      format: json         # json; anything else gives console format
      dir: logs            # when set, also writes app.log and error.log here
    swagger:
      api_path: /api/api.yaml

Log files rotate at 100 MB, keeping three gzip-compressed backups;
`error.log` receives only error entries. An unknown server mode or a port
that is not a number stops the server with an error message.

## API

| Method | Path                              | Body                                          |
|--------|-----------------------------------|-----------------------------------------------|
| GET    | `/ping`                           |                                               |
| POST   | `/v1/account`                     | `{"name": "...", "initial_balance": "100.00"}` |
| GET    | `/v1/account/<id>`                |                                               |
| POST   | `/v1/account/<id>/deposit`        | `{"amount": "50.00"}`                         |
| POST   | `/v1/account/<id>/withdraw`       | `{"amount": "20.00"}`                         |
| POST   | `/v1/account/<id>/transfer`       | `{"to_account_id": 2, "amount": "10.00"}`     |
| GET    | `/v1/account/<id>/transactions`   |                                               |
| GET    | `/swagger/index.html`             |                                               |
| GET    | `/api/<file>`                     |                                               |

`/ping` answers `{"message": "pong"}`. The account routes answer a JSON object
with `code` and `message`, plus `data` on success. Amounts may be given as
strings or numbers and must be greater than zero; `name` and `to_account_id`
are required.

- A malformed body, a bad id, a non-positive amount, a transfer to the same
  account, or a lookup of an unknown account answers 400.
- A failing operation, such as an insufficient balance or a deposit to an
  unknown account, answers 500.

A `Trace-Id` request header is carried into the service's log lines and
recorded on the transactions the request creates; a new one is generated when
it is absent. Every request is logged with its method, path, status and
latency.

`/swagger/index.html` is a plain page linking to the configured `api_path`;
`/api/<file>` serves files from the `api` directory under the working
directory.

## Using the library

    from decimal import Decimal
    from banking.storage import MemoryStorage
    from banking.service import AccountService

    service = AccountService(MemoryStorage())
    alice = service.create_account("alice", Decimal("100"))
    bob = service.create_account("bob", Decimal("0"))
    service.transfer(alice.id, bob.id, Decimal("25"))
    print(service.get_account(bob.id).to_dict()["balance"])  # 25.00

Failed operations raise `banking.storage.StorageError` with a message such as
`"insufficient balance"` or `"account not found"`.

To embed the API in your own process, build the Flask application with
`banking.app.create_app(config)` using a `banking.config.Config`, for example
one returned by `banking.config.setup(path)`.

## Limits

- Accounts and transactions live only in memory and are lost when the
  process ends; there is no database.
- The `read_timeout`, `write_timeout` and `rate_limit` server settings are
  read from the configuration but not applied.
- There is no authentication.
- The documentation page only links to the specification file; it is not an
  interactive API browser.

## Tree inversion example

A separate helper mirrors a binary tree given in level order:

    invert-tree

prints the inverted form of a few sample trees. From code, use
`arr_to_tree`, `invert_tree` and `tree_to_arr` in `banking.invert_tree`.