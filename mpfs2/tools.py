'''
Glue between the codec and the local filesystem used by the command line.
'''
import calendar
import datetime
import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from .flags import restore_compression_suffix
from .records import FileRecord


logger = logging.getLogger(__name__)

TIMESTAMP_FORMATS = (
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d %H:%M',
    '%Y-%m-%d',
)


def parse_timestamp(text: str) -> int:
    '''Seconds since the epoch from an integer or a UTC date.'''
    text = text.strip()

    if text.isdigit():
        return int(text)

    for fmt in TIMESTAMP_FORMATS:
        try:
            moment = datetime.datetime.strptime(text, fmt)
        except ValueError:
            continue

        return calendar.timegm(moment.timetuple())

    raise ValueError(f'cannot parse \'{text}\' as a timestamp')


def collect_records(directory, timestamp: Optional[int] = None) -> List[FileRecord]:
    '''All the files below the directory, sorted by path.'''
    root = Path(directory)

    if not root.is_dir():
        raise NotADirectoryError(f'\'{directory}\' is not a directory')

    records = []
    for path in sorted(root.glob('**/*')):
        if not path.is_file():
            continue

        name = path.relative_to(root).as_posix()
        mtime = int(path.stat().st_mtime) if timestamp is None else timestamp

        logger.debug('collected \'%s\'', name)
        records.append(FileRecord(name, path.read_bytes(), timestamp=mtime))

    return records


def materialize_name(record: FileRecord) -> str:
    return restore_compression_suffix(record.name, record.flags)


def write_tree(records: Iterable[FileRecord], directory) -> List[Path]:
    '''Write the files below the directory, the compression suffix is restored
    and the modification time is the timestamp of the record.'''
    root = Path(directory).resolve()
    paths = []

    for record in records:
        path = (root / materialize_name(record)).resolve()

        if root not in path.parents:
            raise ValueError(f'\'{record.name}\' would be written outside \'{root}\'')

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(record.data)
        os.utime(path, (record.timestamp, record.timestamp))

        logger.debug('written \'%s\'', path)
        paths.append(path)

    return paths


def _format_flags(record: FileRecord) -> str:
    return '%s%s' % (
        'C' if record.compressed else '-',
        'I' if record.indexed else '-',
    )


def _format_hash(record: FileRecord) -> str:
    if record.name_hash_ok is None:
        return '-'

    return 'OK' if record.name_hash_ok else 'FAIL'


def format_listing(records: Iterable[FileRecord]) -> List[str]:
    lines = [f'{"Name":<40} {"Size":>10} {"Flags":<5} {"Timestamp":<19} Hash']

    for record in records:
        moment = datetime.datetime.fromtimestamp(record.timestamp, tz=datetime.timezone.utc)
        lines.append(
            f'{record.name:<40} {len(record.data):>10} {_format_flags(record):<5} '
            f'{moment:%Y-%m-%d %H:%M:%S} {_format_hash(record)}'
        )

    return lines
