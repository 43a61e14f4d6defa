"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from argparse import Namespace
from typing import Callable, List, Type, TypeVar
from dataclasses import dataclass, field

from .dialect import Dialect


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the conversion pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: verbosity, dialect, inputs, unknownOptions, showHelp, showVersion
        - options_check: optionsOK
        - documents_convert: convertedNames, linesWritten
        - results_report: (no additions, terminal stage)

    Attributes:
        verbosity: Logging verbosity level (0-3)
        dialect: Target macro package for every input of this run
        inputs: Input paths in argument order ("-" is standard input)
        unknownOptions: Unrecognized command line options (advisory only)
        showHelp: Print the usage screen before converting
        showVersion: Print the version line before converting
        optionsOK: Options were checked
        convertedNames: Display names of the documents written so far
        linesWritten: Total number of output lines written
    """

    # CLI arguments
    verbosity: int = field(default=0)
    dialect: Dialect = field(default=Dialect.MAN)
    inputs: List[str] = field(default_factory=list)
    unknownOptions: List[str] = field(default_factory=list)
    showHelp: bool = field(default=False)
    showVersion: bool = field(default=False)

    # Pipeline state
    optionsOK: bool = field(default=False)
    convertedNames: List[str] = field(default_factory=list)
    linesWritten: int = field(default=0)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, unknown: List[str]
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and leftover arguments.

        Leftover arguments that look like options become unknownOptions;
        anything else is an input that argparse could not place.

        Args:
            options: Parsed CLI arguments (dialect, verbosity, inputs)
            unknown: Arguments argparse did not recognize

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        inputs = list(filtered_options.pop("inputs", None) or [])
        unknownOptions = []
        for arg in unknown:
            if arg.startswith("-") and arg != "-":
                unknownOptions.append(arg)
            else:
                inputs.append(arg)

        return cls(**filtered_options, inputs=inputs, unknownOptions=unknownOptions)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            options_check,
            documents_convert,
            results_report
        )

    This is equivalent to:
        results_report(documents_convert(options_check(initial_state)))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
