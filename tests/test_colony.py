"""Tests for genecolony.evolution.colony - the evolution engine."""

import dataclasses
from collections.abc import Iterator
from typing import Any, Callable

import pytest

from genecolony.eco.ecology import Fitness
from genecolony.eco.environment import Environment
from genecolony.evolution.colony import Colony
from genecolony.evolution.generation import Generation
from genecolony.evolution.organism import Organism
from genecolony.evolution.random import RNG
from genecolony.exceptions import (
    FitnessUndefinedError,
    GenerationExhaustedError,
    UnimplementedFeatureError,
)
from genecolony.genetics.dna import Base
from genecolony.genetics.genome import Genome

OrganismFactory = Callable[..., Organism]


class TestSeeding:
    """Tests for Colony.seed_members."""

    def test_seed_keeps_generation(self, colony: Colony, rng: RNG[Base]) -> None:
        start = colony.build((), Generation(4))
        seeded = start.seed_members(5, start.genome, 2, rng)
        assert seeded.generation == Generation(4)
        assert len(seeded) == 5

    def test_seed_threads_source_sequentially(
        self,
        colony: Colony,
        genome: Genome,
        rng: RNG[Base],
    ) -> None:
        expected = []
        source = rng
        for _ in range(5):
            nucleus, source = genome.recombine(source)
            expected.append(nucleus)
        seeded = colony.seed_members(5, genome, 2, rng)
        assert [o.nucleus for o in seeded.organisms] == expected

    def test_seed_is_reproducible(self, colony: Colony, rng: RNG[Base]) -> None:
        a = colony.seed(4, rng)
        b = colony.seed(4, rng)
        assert [o.identifier for o in a.organisms] == [
            o.identifier for o in b.organisms
        ]

    def test_seed_notifies_visualizer(
        self,
        colony: Colony,
        rng: RNG[Base],
        visualizer: Any,
    ) -> None:
        seeded = colony.seed(3, rng)
        assert visualizer.created == [o.name for o in seeded.organisms]

    def test_seeded_members_belong_to_colony_generation(
        self,
        colony: Colony,
        rng: RNG[Base],
    ) -> None:
        seeded = colony.seed(3, rng)
        assert all(o.generation == colony.generation for o in seeded.organisms)
        assert len({o.identifier for o in seeded.organisms}) == 3

    def test_reseeding_destroys_previous_members(
        self,
        colony: Colony,
        genome: Genome,
        rng: RNG[Base],
        visualizer: Any,
    ) -> None:
        first = colony.seed(3, rng)
        source = rng
        for _ in range(3):
            _, source = genome.recombine(source)
        second = first.seed(3, source)
        assert visualizer.destroyed == [o.name for o in first.organisms]
        live = set(visualizer.created) - set(visualizer.destroyed)
        assert live == {o.name for o in second.organisms}

    def test_ploidy_mismatch_rejected(self, colony: Colony, rng: RNG[Base]) -> None:
        with pytest.raises(ValueError):
            colony.seed_members(2, colony.genome, 3, rng)


class TestCulling:
    """Tests for Colony.cull_members."""

    def test_cull_advances_and_empties(self, colony: Colony, rng: RNG[Base]) -> None:
        seeded = colony.seed(6, rng)
        culled = seeded.cull_members()
        assert culled.generation == seeded.generation.next()
        assert len(culled) == 0
        assert culled.is_exhausted

    def test_cull_leaves_snapshot_untouched(
        self,
        colony: Colony,
        rng: RNG[Base],
    ) -> None:
        seeded = colony.seed(6, rng)
        seeded.cull_members()
        assert len(seeded) == 6

    def test_cull_past_limit_fails(self, colony: Colony) -> None:
        last = colony.build((), Generation(3, limit=3))
        with pytest.raises(GenerationExhaustedError):
            last.cull_members()


class TestFitnessEvaluation:
    """Tests for is_fit and evaluate_fitness."""

    def test_threshold_is_inclusive(self, colony: Colony) -> None:
        assert colony.is_fit(Fitness(0.5))
        assert not colony.is_fit(Fitness(0.4999999))

    def test_fit_organism(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
    ) -> None:
        assert colony.evaluate_fitness(make_organism("TA", "AC"))

    def test_unfit_organism(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
    ) -> None:
        assert not colony.evaluate_fitness(make_organism("AA", "AC"))

    def test_boundary_organism_is_fit(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
    ) -> None:
        # height 1.5 against 1.5 gives exactly 0.5
        organism = make_organism("CA", "CC")
        assert colony.fitness_of(organism) == Fitness(0.5)
        assert colony.evaluate_fitness(organism)

    def test_undefined_fitness_is_fatal(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
    ) -> None:
        bare = dataclasses.replace(
            colony,
            environment=Environment("empty", colony.environment.ecology, {}),
        )
        with pytest.raises(FitnessUndefinedError):
            bare.evaluate_fitness(make_organism("TA", "AC"))


class TestOffspring:
    """Tests for the offspring sequence."""

    def test_offspring_is_lazy(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
    ) -> None:
        populated = colony.build([make_organism("TA", "AC")], colony.generation)
        assert isinstance(populated.offspring, Iterator)

    def test_asexual_offspring_concatenate_in_order(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
    ) -> None:
        first = make_organism("TA", "AC", uid=1, fecundity=2)
        second = make_organism("GA", "AC", uid=2, fecundity=3)
        populated = colony.build([first, second], colony.generation)
        children = list(populated.offspring)
        assert len(children) == 5
        expected = [c.identifier for c in first.offspring()] + [
            c.identifier for c in second.offspring()
        ]
        assert [c.identifier for c in children] == expected

    def test_sexual_offspring_are_viable_members(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
    ) -> None:
        sexual = dataclasses.replace(
            colony,
            genome=dataclasses.replace(colony.genome, sexual=True),
        )
        members = [make_organism("TA", "AC", uid=1), make_organism("AA", "AC", uid=2)]
        populated = sexual.build(members, sexual.generation)
        assert list(populated.offspring) == members


class TestNextGeneration:
    """Tests for one full evolution step."""

    def test_survivors_reproduce_into_next_generation(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
    ) -> None:
        fit = make_organism("TA", "AC", uid=1)
        unfit = make_organism("AA", "AC", uid=2)
        populated = colony.build([fit, unfit], colony.generation)
        nxt = populated.next_generation()
        assert nxt.generation == Generation(1)
        assert len(nxt) == 1
        assert nxt.organisms[0].nucleus == fit.nucleus
        assert len(populated) == 2

    def test_visualizer_sees_every_transition(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
        visualizer: Any,
    ) -> None:
        fit = make_organism("TA", "AC", uid=1)
        unfit = make_organism("AA", "AC", uid=2)
        nxt = colony.build([fit, unfit], colony.generation).next_generation()
        assert visualizer.destroyed == [unfit.name, fit.name]
        assert visualizer.updated == [fit.name]
        assert visualizer.created == [nxt.organisms[0].name]

    def test_live_avatars_track_population(
        self,
        colony: Colony,
        rng: RNG[Base],
        visualizer: Any,
    ) -> None:
        current = colony.seed(10, rng)
        for _ in range(3):
            current = current.next_generation()
            live = set(visualizer.created) - set(visualizer.destroyed)
            assert live == {o.name for o in current.organisms}

    def test_single_lineage_keeps_one_avatar(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
        visualizer: Any,
    ) -> None:
        fit = make_organism("TA", "AC", uid=1)
        visualizer.created.append(fit.name)
        current = colony.build([fit], colony.generation)
        for _ in range(3):
            current = current.next_generation()
        live = set(visualizer.created) - set(visualizer.destroyed)
        assert len(visualizer.created) == 4
        assert live == {current.organisms[0].name}

    def test_sexual_survivors_join_next_generation(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
        visualizer: Any,
    ) -> None:
        sexual = dataclasses.replace(
            colony,
            genome=dataclasses.replace(colony.genome, sexual=True),
        )
        fit = make_organism("TA", "AC", uid=1)
        unfit = make_organism("AA", "AC", uid=2)
        nxt = sexual.build([fit, unfit], sexual.generation).next_generation()
        assert [o.identifier for o in nxt.organisms] == [fit.identifier]
        assert all(o.generation == nxt.generation for o in nxt.organisms)
        assert visualizer.destroyed == [unfit.name]
        assert visualizer.created == []

    def test_colony_is_unhashable(self, colony: Colony) -> None:
        with pytest.raises(TypeError):
            hash(colony)

    def test_all_unfit_exhausts_population(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
    ) -> None:
        populated = colony.build([make_organism("AA", "AC")], colony.generation)
        assert populated.next_generation().is_exhausted

    def test_apply_is_unimplemented(
        self,
        colony: Colony,
        make_organism: OrganismFactory,
    ) -> None:
        with pytest.raises(UnimplementedFeatureError):
            colony.apply(make_organism("TA", "AC").phenotype)
