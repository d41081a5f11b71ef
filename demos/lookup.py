import logging
import sys
import dnsrecords


def records_str(hostname: str, records: list) -> str:
    sep = '-------------------------'
    string = f'\n{sep}\nHost: {hostname}\n'
    for record in records:
        string += f'{record}\n'

    string += f'Total records found: {len(records)}\n{sep}'
    return string


def main() -> int:
    if len(sys.argv) < 2:
        hostname = input('Enter a hostname to look up: ').strip()
    else:
        hostname = sys.argv[1].strip()

    types = sys.argv[2].split(',') if len(sys.argv) > 2 else None
    dns = dnsrecords.Dns.query()
    if len(sys.argv) > 3:
        dns.use_nameserver(sys.argv[3])

    exit_code = 1
    try:
        records = dns.get_records(hostname, types)
        print(records_str(hostname, records))
        exit_code = 0
    except dnsrecords.InvalidArgument as exc:
        print(f'Invalid lookup: {exc}')
    except dnsrecords.CouldNotFetchDns as exc:
        print(f'Error fetching records, check your network connection: {exc}')

    return exit_code


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
