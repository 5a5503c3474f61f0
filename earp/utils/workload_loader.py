from earp.records import AccessRecord


class WorkloadLoader:
    def __init__(self, default_size=8):
        self.default_size = default_size

    def load_trace(self, path):
        # one access per line: "<R|W> <address> [size]", address decimal or 0x-hex
        records = []
        with open(path, 'r') as f:
            for lineno, line in enumerate(f, 1):
                s = line.strip()
                if not s or s.startswith('#'):
                    continue
                records.append(self.parse_line(s, lineno))
        return records

    def parse_line(self, line, lineno=0):
        parts = line.split()
        if len(parts) not in (2, 3):
            raise ValueError(f"line {lineno}: expected '<R|W> <address> [size]', got {line!r}")
        op = parts[0].upper()
        if op not in ('R', 'W'):
            raise ValueError(f"line {lineno}: unknown operation {parts[0]!r}")
        try:
            address = int(parts[1], 0)
        except ValueError:
            # bare hex without the 0x prefix
            address = int(parts[1], 16)
        size = int(parts[2], 0) if len(parts) == 3 else self.default_size
        return AccessRecord(address, op == 'W', size)
