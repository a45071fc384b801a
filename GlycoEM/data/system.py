# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>
from GlycoEM.messages import Messages
import os


class System:
    '''
    A structure to validate together with everything a protocol needs
    to run on it.

    Protocol objects modify the state of the system to return results.
    '''
    def __init__(self,
                 structure=None,
                 config=None,
                 database=None):

        self.structure = structure
        self.config = config
        self.database = database
        self.nonbond = None
        self.sugars = []
        self.protocols = []
        # protocol flags
        self.validated = False

        # running options
        self.output = '.'
        self.verbose = False
        self.overwrite = False
        self.write_results = False
        self.residues = []
        self.exclude = []
        self._log = ''

    def run(self):
        for protocol in self.protocols:
            try:
                protocol.run()
            except Exception as e:
                self.log(Messages.fatal_exception(protocol.__class__.__name__, e))
                raise

    def log(self, string, echo=True):
        if echo:
            print(string)
        self._log += string + '\n'

    def write_log(self):
        output = getattr(self, 'output', '.')
        os.makedirs(output, exist_ok=True)
        file = os.path.join(output, 'log.out')
        with open(file, 'w') as f:
            f.write(self._log)
        return file

    def add_protocol(self, protocol):
        self.protocols.append(protocol)
