import configparser
import logging
import os

from evoprop.activations import activations

logger = logging.getLogger(__name__)

TRAINERS = ('backpropagation', 'genetic')

class Config:

    @staticmethod
    def _parse_layer_sizes(raw_sizes):
        """
        Parse layer_sizes from string to list.

        Parameters:
            raw_sizes: Either a comma-separated list of positive integers, or already a list

        Returns:
            List of neuron counts, input layer first
        """
        if isinstance(raw_sizes, (list, tuple)):
            sizes = [int(size) for size in raw_sizes]
        else:
            try:
                sizes = [int(size.strip()) for size in raw_sizes.split(',')]
            except ValueError:
                raise ValueError(f"Invalid layer_sizes '{raw_sizes}'") from None

        if not sizes or any(size < 1 for size in sizes):
            raise ValueError(f"Invalid layer_sizes '{raw_sizes}': need at least one positive size")
        return sizes

    @staticmethod
    def _check_activation(name):
        if name not in activations:
            raise ValueError(f"Invalid activation function '{name}'")
        return name

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config holding defaults.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a default Config for manual attribute setting.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.layer_sizes       = [2, 2, 1]
            self.activation        = 'sigmoid'
            self.output_activation = 'sigmoid'

            self.trainer = 'backpropagation'
            self.seed    = None

            self.learn_rate = 0.7
            self.momentum   = 0.9

            self.population_size   = 100
            self.mutation_percent  = 0.1
            self.percent_to_mate   = 0.25
            self.mating_population = None
            self.cut_length        = None
            self.reset_weights     = True
            self.num_jobs          = 1

            self.max_iterations          = 1000
            self.error_termination_check = True
            self.error_threshold         = 0.01

            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [NETWORK]

        # The number of neurons in each layer, input layer first, output layer last.
        # Any layer in between is a hidden layer.
        self.layer_sizes = self._parse_layer_sizes(get_value('NETWORK', 'layer_sizes', str))

        # Activation function of the hidden layers ('linear', 'sigmoid' or 'tanh').
        # Input layers pass their values through unchanged.
        self.activation = self._check_activation(get_value('NETWORK', 'activation', str, default='sigmoid'))

        # Activation function of the output layer; same as 'activation' if omitted.
        output_activation = get_value('NETWORK', 'output_activation', str, default=None)
        self.output_activation = self._check_activation(output_activation or self.activation)

        # [TRAINING]

        # The training algorithm.
        # Allowed values:
        #   "backpropagation" - batch gradient descent with momentum
        #   "genetic"         - genetic algorithm over the flattened weights
        self.trainer = get_value('TRAINING', 'trainer', str, default='backpropagation')
        if self.trainer not in TRAINERS:
            raise ValueError(f"Invalid trainer '{self.trainer}', expected one of {TRAINERS}")

        # Seed for the random generators, for reproducible runs. Use "None" for a random seed.
        self.seed = get_value('TRAINING', 'seed', int, default=None)

        # [BACKPROPAGATION]

        # The degree to which the gradients of one iteration modify the weights.
        self.learn_rate = get_value('BACKPROPAGATION', 'learn_rate', float, default=0.7)

        # The degree to which the previous weight update carries into the current one.
        # Set to 0 for no momentum.
        self.momentum = get_value('BACKPROPAGATION', 'momentum', float, default=0.9)

        # [GENETIC]

        # The number of chromosomes in the population.
        self.population_size = get_value('GENETIC', 'population_size', int, default=100)

        # The probability that an offspring is mutated.
        self.mutation_percent = get_value('GENETIC', 'mutation_percent', float, default=0.1)

        # The fraction of the population (the best ones) that mates on each generation.
        # Each mating produces two offspring, which replace the worst chromosomes.
        self.percent_to_mate = get_value('GENETIC', 'percent_to_mate', float, default=0.25)

        # The fraction of the population (the best ones) from which fathers are drawn.
        # Use "None" for twice 'percent_to_mate'.
        self.mating_population = get_value('GENETIC', 'mating_population', float, default=None)

        # The number of genes swapped during crossover.
        # Use "None" for a third of the number of genes.
        self.cut_length = get_value('GENETIC', 'cut_length', int, default=None)

        # Whether each chromosome starts from fresh random weights ('True'),
        # or from a copy of the prototype network's weights ('False').
        self.reset_weights = get_value('GENETIC', 'reset_weights', bool, default=True)

        # Number of worker threads used for mating.
        # 1 = run the mating tasks inline, -1 = use all available CPU cores.
        self.num_jobs = get_value('GENETIC', 'num_jobs', int, default=1)

        # [TERMINATION]

        # The number of iterations after which to stop the run.
        self.max_iterations = get_value('TERMINATION', 'max_iterations', int)

        # Whether to stop the run as soon as the error drops to 'error_threshold'.
        self.error_termination_check = get_value('TERMINATION', 'error_termination_check', bool, default=True)

        # The error which when reached causes the run to end.
        # Only applicable if 'error_termination_check' is 'True'.
        self.error_threshold = get_value('TERMINATION', 'error_threshold', float, default=0.01)

        if self.trainer == 'backpropagation' and self.activation == 'linear' and len(self.layer_sizes) > 2:
            logger.warning("Hidden layers with a linear activation can't be trained by backpropagation")

    def __setattr__(self, name, value):
        """
        Override 'setattr' to automatically parse layer_sizes when set.
        This allows users to write config.layer_sizes = "2, 3, 1".
        """
        if name == 'layer_sizes':
            value = self._parse_layer_sizes(value)
        super().__setattr__(name, value)
