# labtools

Three small console utilities in one package. All messages the commands
print are in Russian.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Commands

### `labtools-shell`

An interactive session with registration and login. Users are stored in
`database.txt` in the current directory as `login pin` lines, in plain
text. A login is 1 to 6 ASCII letters or digits, and a PIN is an integer
from 0 to 1000000. Registering a login that already exists is refused.

After logging in, the menu offers:

1. current time (`HH:MM:SS`)
2. current date (`DD.MM.YYYY`)
3. time elapsed since a date (`DD.MM.YYYY`, from 1970 up to now) in
   seconds (`-s`), minutes (`-m`), hours (`-h`) or years (`-y`)
4. logout
5. limit the number of requests for another registered user
   (confirmed by entering `12345`)

A user with a limit is sent back to the login prompt once the number of
menu commands in one session passes it. Limits are saved to
`sanctions.txt` at the end of each session, loaded at the next login, and
the file is emptied when the user chooses "exit" at the login prompt.

### `labtools-fileops`

Works on one or more files, with the operation named by the last arguments:

```
labtools-fileops FILE... xorN          # N from 2 to 6: XOR of all 2**N-bit blocks
labtools-fileops FILE... mask HEX      # count 32-bit words (native byte order) equal to HEX
labtools-fileops FILE... copyN         # N from 0 to 10: make FILE_1.txt ... FILE_N.txt
labtools-fileops FILE... find STRING   # report which files contain STRING
```

For `xorN` the file's bits are read lowest bit first; a short final block
is padded with zero bits at the low end. The `mask` value is hexadecimal,
at most 8 characters. The `find` string understands the escapes `\n`,
`\t`, `\r`, `\0` and `\\`; carriage returns in the files are ignored, and a
file that cannot be read is reported as not containing the string.

The exit status is 0 on success and 2 for invalid arguments.

### `labtools-ls`

Prints a long listing of a directory, one line per entry: type and
permissions, hard links, owner, group, size, modification time, name and
inode. Symbolic links are followed.

```
labtools-ls            # the current directory
labtools-ls DIR...     # each named directory under the current one
```

The exit status is 2 if a directory is not found and 5 if an entry cannot
be examined.

## Library use

The modules can be used from Python as well:

- `labtools.accounts`: `UserDatabase` (`sign_in`, `log_in`, `user_exists`),
  `SanctionsList` (`add`, `check`, `limit_for`, `save`, `load`, `clear`),
  `is_valid_login`, `is_valid_pin`, and the `AccountError` exceptions.
- `labtools.clock`: `current_time`, `current_date`, `is_leap_year`,
  `days_in_month`, `parse_date`, `howmuch`, and the `DateError` exceptions.
- `labtools.fileops`: `xor_blocks`, `count_mask`, `copy_n`, `find_string`,
  `unescape_pattern`, `parse_hex_uint32`, `check_n`, and the
  `FileOpsError` exceptions.
- `labtools.listing`: `read_directory`, `print_info`, `FileEntry`,
  `file_type_char`, `permissions_string`.
- `labtools.shell`: `run_shell` runs the login shell over any text streams.

```python
from labtools.fileops import xor_blocks, count_mask
from labtools.clock import howmuch
from labtools.listing import read_directory, print_info

print(xor_blocks("data.bin", 3))
print(count_mask("data.bin", "deadbeef"))
print(howmuch("01.01.2000", "-y"))
print_info(read_directory("."))
```

## Limitations

PINs are stored unhashed in `database.txt`, and the login shell keeps no
other account data. The directory lister has no options for sorting,
hidden files or recursion.