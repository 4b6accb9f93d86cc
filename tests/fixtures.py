FARM_OUTLINE = '''Feature: Farm activities
Scenario Outline: Shave an animal
  Given I am Old McDonald
  And On that farm there is a <animal>
  Then I hear a <noise>
Examples:
  | animal | noise |
  | cow    | moo   |
  | horse  | neigh |
'''

FARM_FEATURE = '''
    Feature: Farm activities


    Scenario: Shave a yak
        Given I have a yak
        And My yak has hair
        And I have a razor
        When I shave the yak
        Then My yak does not have <hair>
        And I have yak hair



    Scenario Outline: Shave an animal
        Given I am Old McDonald
        And I have a farm
        And On that farm there is a <animal>
        When I listen
        Then I hear a <noise> here
        And I hear a <noise> there

    @Mammal
    Examples:
        | animal  | noise |
        | cow     | moo   |
        | horse   | neigh |
        | pig     | oink  |

    @Bird
    Examples:
        | duck    | quack |
        | chicken | cluck |
'''

FARM_FIXTURE = '''# a comment before everything
@farm
Feature: Farm activities
    As a farmer

    Background:
        Given I have a farm

    @yak
    Scenario: Shave a yak
        Given I have a yak
        When I shave the yak

    Scenario Outline: Count animals
        Given there are <count> <animal>
        Then the farm is <full>

    @Mammal
    Examples:
        | count | animal | full  |
        | 1     | cow    | false |
        | 2     | "pig"  | true  |

    Examples:
        | count | animal | full |
        | 3     | \\duck  | true |
'''
