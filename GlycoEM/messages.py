# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>

class Messages:

    @staticmethod
    def intro(version):
        return f"""
*******************************************************************************
*                              GlycoEM {version}                                  *
*                                                                             *
* Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),     *
* Hamburg, Germany.                                                           *
* Developed by Aaron Sweeney <aaron.sweeney AT cssb-hamburg.de>               *
*                                                                             *
* Sugar ring conformation and stereochemistry validation using                *
* Cremer-Pople puckering analysis.                                            *
*******************************************************************************
\n"""


    @staticmethod
    def create_centered_box(message: str, width: int = 77) -> str:
        """
        Create a centered ASCII message box.

        Example:
        *===========================================================================*
        |                        Sugar Conformation Analysis                        |
        *===========================================================================*
        """
        message = "" if message is None else str(message).replace("\n", " ").strip()

        # "| " + message + " |"
        min_width = len(message) + 4
        width = max(int(width), min_width)

        inner_width = width - 2
        msg_line = message.center(inner_width)

        top = "*" + ("=" * inner_width) + "*"
        mid = "|" + msg_line + "|"
        bot = "*" + ("=" * inner_width) + "*"

        return "\n".join((top, mid, bot))


    @staticmethod
    def glycoem_warning(class_name, func_name, error):
        return f"GlycoEM-Warning: Non-fatal error in {class_name}, skipping running {func_name}. \nFull Error: {error}"

    @staticmethod
    def fatal_exception(class_name, error):
        return f"GlycoEM-Error: Fatal error in {class_name}. \n Full Error: {error}"

    @staticmethod
    def unsupported_sugar(monomer_id, error):
        return f"GlycoEM-Warning: {monomer_id} is not a supported sugar ring, marking as unsupported. \nReason: {error}"

    @staticmethod
    def missing_reference(residue_name):
        return f"GlycoEM-Warning: No reference entry for '{residue_name}', sanity checks disabled."

    @staticmethod
    def missing_symops(structure_name, space_group=""):
        group = f" (space group '{space_group}')" if space_group else ""
        return (f"GlycoEM-Warning: {structure_name or 'Structure'} has a unit cell{group} but no symmetry operators, "
                "contacts across crystal neighbours will not be found.")

    @staticmethod
    def overwrite(path, overwrite):
        if overwrite:
            print(f"""GlycoEM-Warning: Overwriting data in {path}.
               To stop automatic overwriting, set overwrite = 0 in the configuration file.""")
        else:
            print(f"""GlycoEM-OverWriteError: {path} exists.
                  To avoid accidentally overwriting files please choose another directory or set overwrite to 1 in your configuration file""")
