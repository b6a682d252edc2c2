class ChromosomeReorderError(Exception):
    """
    raised when an input stream re-enters a chromosome it has already moved past. Chromosomes
    must form contiguous blocks in both the query and the annotation inputs
    """

    def __init__(self, chromosome, stream, record_number):
        self.chromosome = chromosome
        self.stream = stream
        self.record_number = record_number
        Exception.__init__(
            self,
            f'{stream} record {record_number}: chromosome {chromosome} is out of order '
            '(records for each chromosome must be contiguous)',
        )


class MalformedIntervalError(Exception):
    """
    raised when an interval is given with an end before its start
    """

    pass


class ParseError(Exception):
    """
    raised when a record in an input file cannot be read
    """

    def __init__(self, filename, record_number, reason):
        self.filename = filename
        self.record_number = record_number
        self.reason = reason
        Exception.__init__(self, f'Parsing {filename} record {record_number}: {reason}')


class ReferenceNotFoundError(Exception):
    pass
